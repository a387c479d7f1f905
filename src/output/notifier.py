"""
실행 결과 알림

- build_context: PipelineRun -> NotificationContext (읽기 전용 투영)
- render_notification_body: 순수 함수, HTML 본문 렌더링 (Jinja2)
- NotificationDispatcher: 메일 전송, 전송 실패는 로그만 남김
"""
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.core.interfaces import Mailer, RunStatus
from src.core.logger import get_logger
from src.core.models import NotificationContext, PipelineRun
from src.core.settings import BuildInfo, MailSettings


TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "notification.html"

# 상태별 라벨/색상/아이콘
STATUS_STYLES = {
    RunStatus.SUCCESS: {"label": "SUCCESS", "color": "#28a745", "icon": "✅"},
    RunStatus.FAILURE: {"label": "FAILURE", "color": "#dc3545", "icon": "❌"},
}

_jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)


def build_context(run: PipelineRun, build: BuildInfo) -> NotificationContext:
    """실행 컨텍스트에서 알림 필드 추출"""
    # 확정 전 실행은 실패로 간주
    status = run.final_status or RunStatus.FAILURE
    style = STATUS_STYLES[status]
    params = run.parameters

    return NotificationContext(
        job_name=build.job_name,
        build_number=build.build_number,
        branch=params.branch,
        environment=params.environment.value,
        version=params.release_version,
        build_url=build.build_url,
        status=style["label"],
        accent_color=style["color"],
        image_name=run.image_name,
        report_url=run.report_url,
    )


def build_subject(context: NotificationContext) -> str:
    """메일 제목"""
    icon = next(
        (s["icon"] for s in STATUS_STYLES.values() if s["label"] == context.status),
        "",
    )
    return f"{icon} {context.status}: Job '{context.job_name} [#{context.build_number}]'".strip()


def render_notification_body(context: NotificationContext) -> str:
    """
    알림 HTML 본문 렌더링

    Args:
        context: 알림 컨텍스트

    Returns:
        HTML 문자열
    """
    template = _jinja_env.get_template(TEMPLATE_NAME)
    return template.render(ctx=context)


class NotificationDispatcher:
    """
    결과 알림 발송기

    사용법:
        dispatcher = NotificationDispatcher(mailer, settings.mail, settings.build)
        dispatcher.dispatch(run, enabled=params.send_email)
    """

    def __init__(self, mailer: Mailer, mail: MailSettings, build: BuildInfo):
        self.logger = get_logger(self.__class__.__name__)
        self.mailer = mailer
        self.mail = mail
        self.build = build

    def dispatch(self, run: PipelineRun, enabled: bool) -> None:
        """
        알림 발송 (예외를 던지지 않음)

        Args:
            run: 확정된 실행 컨텍스트
            enabled: 발송 여부 (SEND_EMAIL)
        """
        if not enabled:
            self.logger.info("메일 알림 비활성화, 발송 생략")
            return

        try:
            context = build_context(run, self.build)
            subject = build_subject(context)
            body = render_notification_body(context)
            self.mailer.send(self.mail.sender, self.mail.recipients, subject, body)
            self.logger.info(f"{context.status} 알림 발송 완료")
        except Exception as e:
            self.logger.error(f"알림 발송 실패 (실행 상태 유지): {e}")
