"""
파이프라인 불변 설정

Config(전역 설정)를 실행 경계에서 한 번 읽어 frozen dataclass로 변환
어댑터/알림기는 생성자로 이 구조체만 받는다
"""
from dataclasses import dataclass, field

from src.core.config import Config


def _as_bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "y", "on")


def _as_recipients(value) -> str:
    """수신자 설정 (문자열 또는 YAML 리스트) -> 쉼표 구분 문자열"""
    if not value:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v).strip() for v in value if v and str(v).strip())
    return str(value)


@dataclass(frozen=True)
class BuildInfo:
    """CI 빌드 메타데이터"""
    job_name: str = "release-pipeline"
    build_number: str = "0"
    build_url: str = ""


@dataclass(frozen=True)
class ImageSettings:
    """컨테이너 이미지 설정"""
    base_name: str = "hello-world-nodejs"
    context_path: str = "."


@dataclass(frozen=True)
class SonarSettings:
    """정적 분석 서버 설정"""
    server_url: str = ""
    token: str = field(default="", repr=False)
    project_key: str = "hello-world-nodejs"
    project_name: str = "hello-world-nodejs"
    sources_path: str = "."
    exclusions: str = "node_modules/**"


@dataclass(frozen=True)
class ScanSettings:
    """취약점 스캔 설정"""
    template_path: str = "@/contrib/html.tpl"
    output_path: str = "trivy-report.html"
    report_name: str = "Trivy Vulnerability Report"


@dataclass(frozen=True)
class MailSettings:
    """알림 메일 설정"""
    sender: str = ""
    recipients: str = ""
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = field(default="", repr=False)
    use_tls: bool = True
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class ToolSettings:
    """외부 도구 실행 설정"""
    workspace: str = "."
    timeout_seconds: float | None = 1800.0
    git: str = "git"
    npm: str = "npm"
    sonar_scanner: str = "sonar-scanner"
    docker: str = "docker"
    trivy: str = "trivy"


@dataclass(frozen=True)
class ArtifactSettings:
    """아티팩트 보관 설정"""
    archive_dir: str = "./artifacts"
    reports_dir: str = "./artifacts/reports"


@dataclass(frozen=True)
class PipelineSettings:
    """파이프라인 전체 설정 (불변)"""
    build: BuildInfo = field(default_factory=BuildInfo)
    image: ImageSettings = field(default_factory=ImageSettings)
    sonar: SonarSettings = field(default_factory=SonarSettings)
    scan: ScanSettings = field(default_factory=ScanSettings)
    mail: MailSettings = field(default_factory=MailSettings)
    tools: ToolSettings = field(default_factory=ToolSettings)
    artifacts: ArtifactSettings = field(default_factory=ArtifactSettings)
    run_tests: bool = True
    preflight: bool = True

    @classmethod
    def from_config(cls, config: Config) -> "PipelineSettings":
        """Config 섹션들로부터 설정 구조체 생성"""
        build = config.get_section("build")
        image = config.get_section("image")
        sonar = config.get_section("sonar")
        scan = config.get_section("scan")
        mail = config.get_section("mail")
        tools = config.get_section("tools")
        artifacts = config.get_section("artifacts")
        pipeline = config.get_section("pipeline")

        timeout = tools.get("timeout_seconds", ToolSettings.timeout_seconds)

        return cls(
            build=BuildInfo(
                job_name=str(build.get("job_name", BuildInfo.job_name)),
                build_number=str(build.get("number", BuildInfo.build_number)),
                build_url=str(build.get("url", "") or ""),
            ),
            image=ImageSettings(
                base_name=image.get("base_name", ImageSettings.base_name),
                context_path=image.get("context_path", ImageSettings.context_path),
            ),
            sonar=SonarSettings(
                server_url=sonar.get("server_url", "") or "",
                token=sonar.get("token", "") or "",
                project_key=sonar.get("project_key", SonarSettings.project_key),
                project_name=sonar.get("project_name", SonarSettings.project_name),
                sources_path=sonar.get("sources_path", SonarSettings.sources_path),
                exclusions=sonar.get("exclusions", SonarSettings.exclusions),
            ),
            scan=ScanSettings(
                template_path=scan.get("template_path", ScanSettings.template_path),
                output_path=scan.get("output_path", ScanSettings.output_path),
                report_name=scan.get("report_name", ScanSettings.report_name),
            ),
            mail=MailSettings(
                sender=mail.get("sender", "") or "",
                recipients=_as_recipients(mail.get("recipients")),
                smtp_host=mail.get("smtp_host", "") or "",
                smtp_port=int(mail.get("smtp_port", MailSettings.smtp_port)),
                smtp_user=mail.get("smtp_user", "") or "",
                smtp_password=mail.get("smtp_password", "") or "",
                use_tls=_as_bool(mail.get("use_tls"), default=True),
                timeout_seconds=float(mail.get("timeout_seconds", MailSettings.timeout_seconds)),
            ),
            tools=ToolSettings(
                workspace=tools.get("workspace", ToolSettings.workspace),
                timeout_seconds=float(timeout) if timeout else None,
                git=tools.get("git", ToolSettings.git),
                npm=tools.get("npm", ToolSettings.npm),
                sonar_scanner=tools.get("sonar_scanner", ToolSettings.sonar_scanner),
                docker=tools.get("docker", ToolSettings.docker),
                trivy=tools.get("trivy", ToolSettings.trivy),
            ),
            artifacts=ArtifactSettings(
                archive_dir=artifacts.get("archive_dir", ArtifactSettings.archive_dir),
                reports_dir=artifacts.get("reports_dir", ArtifactSettings.reports_dir),
            ),
            run_tests=_as_bool(pipeline.get("run_tests"), default=True),
            preflight=_as_bool(pipeline.get("preflight"), default=True),
        )
