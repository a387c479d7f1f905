"""
Output 모듈 - 실행 후처리

- report_publisher: 리포트 아티팩트 보관/게시
- notifier: 결과 알림 렌더링/발송
- mailer: SMTP 전송
"""
from src.output.report_publisher import ReportPublisher, PublishResult, FileSystemArtifactStore
from src.output.notifier import (
    NotificationDispatcher,
    STATUS_STYLES,
    build_context,
    build_subject,
    render_notification_body,
)
from src.output.mailer import SmtpMailer

__all__ = [
    "ReportPublisher",
    "PublishResult",
    "FileSystemArtifactStore",
    "NotificationDispatcher",
    "STATUS_STYLES",
    "build_context",
    "build_subject",
    "render_notification_body",
    "SmtpMailer",
]
