"""
Release Pipeline: 빌드/릴리스 파이프라인

버전 검증 → 체크아웃 → 설치/테스트 → 정적 분석 → 이미지 빌드 → 취약점 스캔
단계 종료(성공/실패 무관) 후 리포트 게시와 메일 알림을 1회씩 실행
"""
from pathlib import Path

from src.core.config import Config, get_config
from src.core.exceptions import ConfigError, ParameterError, PreflightError
from src.core.interfaces import (
    ArtifactStore,
    ImageBuilder,
    Mailer,
    PackageManager,
    SourceControl,
    StaticAnalysis,
    TestRunner,
    VulnerabilityScanner,
)
from src.core.logger import get_logger, setup_logger_from_config
from src.core.models import PipelineRun, ReleaseParameters
from src.core.preflight import PreflightChecker
from src.core.settings import PipelineSettings
from src.orchestrator.stage_runner import Stage, StageRunner
from src.output.mailer import SmtpMailer
from src.output.notifier import NotificationDispatcher
from src.output.report_publisher import FileSystemArtifactStore, PublishResult, ReportPublisher
from src.release.environment import resolve_image_name
from src.release.parameters import parse_parameters
from src.release.version import validate_version
from src.tools import (
    CommandRunner,
    DockerImageBuilder,
    GitSourceControl,
    NpmPackageManager,
    NpmTestRunner,
    SonarScanner,
    TrivyScanner,
)


class ReleasePipeline:
    """
    빌드/릴리스 파이프라인

    사용법:
        pipeline = ReleasePipeline.from_config()
        run = pipeline.run(params)

        if not run.succeeded:
            sys.exit(1)

    외부 협력자는 생성자로 주입 가능 (미지정 시 settings 기반 기본 구현)
    """

    # 단계 정의 (실행 순서)
    STAGES = [
        "validate-version",     # 버전 형식 검증 (부수효과 없음)
        "preflight",            # 외부 도구/설정 확인
        "checkout",             # 소스 체크아웃
        "install",              # 의존성 설치
        "test",                 # 테스트 실행
        "static-analysis",      # SonarQube 분석
        "build-image",          # 컨테이너 이미지 빌드
        "vulnerability-scan",   # Trivy 스캔 (실패 허용)
    ]

    def __init__(
        self,
        settings: PipelineSettings,
        source_control: SourceControl | None = None,
        package_manager: PackageManager | None = None,
        test_runner: TestRunner | None = None,
        static_analysis: StaticAnalysis | None = None,
        image_builder: ImageBuilder | None = None,
        scanner: VulnerabilityScanner | None = None,
        artifact_store: ArtifactStore | None = None,
        mailer: Mailer | None = None,
        preflight_checker: PreflightChecker | None = None,
    ):
        self.logger = get_logger(self.__class__.__name__)
        self.settings = settings

        tools = settings.tools
        workspace = Path(tools.workspace)
        command_runner = CommandRunner(
            cwd=workspace,
            timeout=tools.timeout_seconds,
            secrets=[settings.sonar.token],
        )

        self.source_control = source_control or GitSourceControl(command_runner, workspace, tools.git)
        self.package_manager = package_manager or NpmPackageManager(command_runner, workspace, tools.npm)
        self.test_runner = test_runner or NpmTestRunner(command_runner, workspace, tools.npm)
        self.static_analysis = static_analysis or SonarScanner(command_runner, workspace, tools.sonar_scanner)
        self.image_builder = image_builder or DockerImageBuilder(command_runner, workspace, tools.docker)
        self.scanner = scanner or TrivyScanner(command_runner, workspace, tools.trivy)
        self.preflight_checker = preflight_checker or PreflightChecker(tools, settings.sonar)

        store = artifact_store or FileSystemArtifactStore(
            settings.artifacts.archive_dir, settings.artifacts.reports_dir
        )
        self.publisher = ReportPublisher(store, settings.scan.report_name)
        self.dispatcher = NotificationDispatcher(
            mailer or SmtpMailer(settings.mail), settings.mail, settings.build
        )
        self.runner = StageRunner()

    @classmethod
    def from_config(cls, config: Config | None = None) -> "ReleasePipeline":
        """전역 Config에서 설정을 읽어 파이프라인 생성"""
        return cls(PipelineSettings.from_config(config or get_config()))

    @property
    def report_path(self) -> str:
        """취약점 리포트 경로 (상대 경로는 workspace 기준)"""
        path = Path(self.settings.scan.output_path)
        if not path.is_absolute():
            path = Path(self.settings.tools.workspace) / path
        return str(path)

    def create_run(self, params: ReleaseParameters) -> PipelineRun:
        """실행 컨텍스트 생성 (이미지 이름은 여기서 1회 결정)"""
        image_name = resolve_image_name(self.settings.image.base_name, params.environment)
        self.logger.info(f"이미지 이름 결정: {image_name} (환경: {params.environment.value})")
        return PipelineRun(parameters=params, image_name=image_name)

    def build_stages(
        self,
        run: PipelineRun,
        skip_preflight: bool = False,
        skip_tests: bool = False,
    ) -> list[Stage]:
        """실행할 단계 목록 구성"""
        params = run.parameters
        sonar = self.settings.sonar

        stages = [Stage.strict("validate-version", lambda: validate_version(params.release_version))]

        if self.settings.preflight and not skip_preflight:
            stages.append(Stage.strict("preflight", self._preflight))

        stages.extend([
            Stage.strict("checkout", lambda: self.source_control.checkout(params.repo_url, params.branch)),
            Stage.strict("install", self.package_manager.install),
        ])

        if self.settings.run_tests and not skip_tests:
            stages.append(Stage.strict("test", self.test_runner.run))

        stages.extend([
            Stage.strict("static-analysis", lambda: self.static_analysis.scan(
                sonar.project_key,
                sonar.project_name,
                sonar.server_url,
                sonar.token,
                sonar.sources_path,
                sonar.exclusions,
            )),
            Stage.strict("build-image", lambda: self.image_builder.build(
                run.image_name,
                params.release_version,
                self.settings.image.context_path,
            )),
            Stage.tolerant("vulnerability-scan", lambda: self._scan_image(run)),
        ])

        return stages

    def run(
        self,
        params: ReleaseParameters,
        skip_preflight: bool = False,
        skip_tests: bool = False,
    ) -> PipelineRun:
        """
        전체 파이프라인 실행

        Args:
            params: 릴리스 파라미터
            skip_preflight: Preflight 단계 건너뛰기
            skip_tests: 테스트 단계 건너뛰기

        Returns:
            확정된 PipelineRun
        """
        self.logger.info("=" * 60)
        self.logger.info(
            f"릴리스 파이프라인 시작: {params.release_version} "
            f"({params.environment.value}, {params.branch})"
        )
        self.logger.info("=" * 60)

        run = self.create_run(params)
        stages = self.build_stages(run, skip_preflight=skip_preflight, skip_tests=skip_tests)

        try:
            self.runner.run(run, stages)
        finally:
            if not run.is_finalized:
                run.finalize(aborted=True)
            self._post_run(run)

        self.logger.info("=" * 60)
        self.logger.info(f"파이프라인 종료: {run.final_status.value} ({run.duration_seconds:.1f}초)")
        self.logger.info("=" * 60)
        return run

    def _post_run(self, run: PipelineRun) -> PublishResult:
        """리포트 게시 → 알림 (각 1회, 실패는 로그만)"""
        # 스캔 전에 중단된 실행의 리포트 파일은 이전 실행 것
        if run.get_outcome("vulnerability-scan") is None:
            self.logger.info("취약점 스캔 미실행, 리포트 게시 건너뜀")
            publish_result = PublishResult(path=self.report_path, skipped=True)
        else:
            publish_result = self.publisher.publish(self.report_path)

        if publish_result.published:
            run.report_artifact_path = publish_result.path
            run.report_url = publish_result.report_url

        self.dispatcher.dispatch(run, enabled=run.parameters.send_email)
        return publish_result

    def _preflight(self) -> None:
        result = self.preflight_checker.run()
        if not result.passed:
            raise PreflightError("Preflight 실패", {"failures": result.get_failures()})

    def _scan_image(self, run: PipelineRun) -> None:
        """이전 실행의 리포트를 지우고 스캔"""
        Path(self.report_path).unlink(missing_ok=True)
        self.scanner.scan(
            run.image_name,
            run.parameters.release_version,
            self.settings.scan.template_path,
            self.report_path,
        )


def main(argv: list[str] | None = None) -> int:
    """
    CLI 진입점

        python -m src.orchestrator.pipeline --version 1.2.3 --environment dev

    Returns:
        종료 코드 (성공 0, 실행 실패 1, 파라미터 오류 2)
    """
    import argparse

    parser = argparse.ArgumentParser(description="빌드/릴리스 파이프라인 실행")
    parser.add_argument("--version", dest="release_version", help="릴리스 버전 (RELEASE_VERSION)")
    parser.add_argument("--repo-url", dest="repo_url", help="Git 저장소 URL (GIT_REPO_URL)")
    parser.add_argument("--branch", help="브랜치 (BRANCH, 기본: main)")
    parser.add_argument("--environment", help="배포 환경 dev|qa|staging|prod (ENVIRONMENT)")
    parser.add_argument(
        "--send-email",
        dest="send_email",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="결과 메일 발송 (SEND_EMAIL, 기본: true)",
    )
    parser.add_argument("--skip-preflight", action="store_true", help="Preflight 건너뛰기")
    parser.add_argument("--skip-tests", action="store_true", help="테스트 단계 건너뛰기")
    parser.add_argument("--config-env", default=None, help="설정 환경 (APP_ENV)")
    parser.add_argument("--config-dir", default=None, help="설정 디렉토리 (기본: 프로젝트 config/)")
    args = parser.parse_args(argv)

    logger = get_logger("main")

    try:
        config = Config(
            env=args.config_env,
            config_dir=Path(args.config_dir) if args.config_dir else None,
        )
    except ConfigError as e:
        logger.error(f"설정 오류: {e}")
        return 2

    setup_logger_from_config(config)

    try:
        params = parse_parameters({
            "release_version": args.release_version,
            "repo_url": args.repo_url,
            "branch": args.branch,
            "environment": args.environment,
            "send_email": args.send_email,
        })
    except ParameterError as e:
        logger.error(f"파라미터 오류: {e}")
        return 2

    pipeline = ReleasePipeline.from_config(config)
    run = pipeline.run(
        params,
        skip_preflight=args.skip_preflight,
        skip_tests=args.skip_tests,
    )

    print("=" * 60)
    print(f"결과: {run.final_status.value}")
    for outcome in run.stage_outcomes:
        line = f"  {outcome.stage_name:<20} {outcome.kind.value}"
        if outcome.reason:
            line += f" - {outcome.reason}"
        print(line)
    if run.report_artifact_path:
        print(f"리포트: {run.report_artifact_path}")
    print("=" * 60)

    return 0 if run.succeeded else 1


if __name__ == "__main__":
    raise SystemExit(main())
