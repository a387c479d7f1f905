"""
파이프라인 통합 테스트

실제 어댑터(git/npm/sonar/docker/trivy) + 파일시스템 저장소 사용
subprocess.run만 가짜로 대체하여 전체 흐름 검증
"""
import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from src.core.config import Config
from src.core.interfaces import Environment, Mailer, OutcomeKind, RunStatus
from src.core.models import ReleaseParameters
from src.core.settings import (
    ArtifactSettings,
    BuildInfo,
    MailSettings,
    PipelineSettings,
    SonarSettings,
    ToolSettings,
)
from src.orchestrator.pipeline import ReleasePipeline, main


class FakeProcesses:
    """명령별 종료 코드를 지정할 수 있는 subprocess.run 대체"""

    def __init__(self, failing: dict[str, int] | None = None, write_report: bool = False):
        self.failing = failing or {}
        self.write_report = write_report
        self.calls: list[list[str]] = []

    def __call__(self, args, **kwargs):
        self.calls.append(list(args))
        tool = args[0]
        returncode = self.failing.get(tool, 0)

        if tool == "trivy" and returncode == 0 and self.write_report:
            output = Path(args[args.index("-o") + 1])
            output.write_text("<html>report</html>", encoding="utf-8")

        stderr = f"{tool} error" if returncode else ""
        return subprocess.CompletedProcess(args, returncode, stdout="", stderr=stderr)

    def tools_called(self) -> list[str]:
        return [c[0] for c in self.calls]


def _make_settings(tmp_path) -> PipelineSettings:
    return PipelineSettings(
        build=BuildInfo(job_name="hello-world", build_number="42", build_url="http://ci/job/hello-world/42/"),
        sonar=SonarSettings(server_url="http://sonar:9000", token="squ_secret"),
        mail=MailSettings(sender="ci@example.com", recipients="dev@example.com"),
        tools=ToolSettings(workspace=str(tmp_path / "workspace")),
        artifacts=ArtifactSettings(
            archive_dir=str(tmp_path / "archive"),
            reports_dir=str(tmp_path / "reports"),
        ),
        preflight=False,
    )


def _make_params(version: str, environment=Environment.DEV, send_email: bool = True) -> ReleaseParameters:
    return ReleaseParameters(
        release_version=version,
        repo_url="https://example.com/hello-world.git",
        environment=environment,
        send_email=send_email,
    )


class TestReleaseScenarios:
    """릴리스 시나리오 테스트"""

    def test_dev_release_with_failed_scan(self, tmp_path):
        """dev 릴리스: 스캔 실패는 허용, 리포트 없이 성공 메일"""
        fake = FakeProcesses(failing={"trivy": 1})
        mailer = Mock(spec=Mailer)
        pipeline = ReleasePipeline(_make_settings(tmp_path), mailer=mailer)

        with patch("src.tools.command.subprocess.run", side_effect=fake):
            run = pipeline.run(_make_params("1.2.3"))

        assert run.image_name == "dev-hello-world-nodejs"
        assert run.final_status == RunStatus.SUCCESS
        assert run.get_outcome("vulnerability-scan").kind == OutcomeKind.SOFT_FAILURE
        assert run.report_artifact_path is None
        assert fake.tools_called() == ["git", "npm", "npm", "sonar-scanner", "docker", "trivy"]

        docker_call = fake.calls[4]
        assert docker_call[:4] == ["docker", "build", "-t", "dev-hello-world-nodejs:1.2.3"]

        mailer.send.assert_called_once()
        sender, recipients, subject, body = mailer.send.call_args.args
        assert sender == "ci@example.com"
        assert subject == "✅ SUCCESS: Job 'hello-world [#42]'"
        assert "#28a745" in body
        assert "http://ci/job/hello-world/42/console" in body

    def test_prod_release_publishes_report(self, tmp_path):
        """prod 릴리스: 접두사 없는 이미지, 리포트 게시"""
        fake = FakeProcesses(write_report=True)
        mailer = Mock(spec=Mailer)
        pipeline = ReleasePipeline(_make_settings(tmp_path), mailer=mailer)

        with patch("src.tools.command.subprocess.run", side_effect=fake):
            run = pipeline.run(_make_params("2.0.0", environment=Environment.PROD))

        assert run.image_name == "hello-world-nodejs"
        assert run.final_status == RunStatus.SUCCESS
        assert run.report_artifact_path is not None
        assert (tmp_path / "archive" / "trivy-report.html").is_file()
        assert (tmp_path / "reports" / "Trivy_Vulnerability_Report" / "index.html").is_file()

        body = mailer.send.call_args.args[3]
        assert "Trivy" in body

    def test_invalid_version_stops_before_checkout(self, tmp_path):
        """잘못된 버전: 외부 도구 미호출, 실패 메일"""
        fake = FakeProcesses()
        mailer = Mock(spec=Mailer)
        pipeline = ReleasePipeline(_make_settings(tmp_path), mailer=mailer)

        with patch("src.tools.command.subprocess.run", side_effect=fake):
            run = pipeline.run(_make_params("1.2"))

        assert run.final_status == RunStatus.FAILURE
        assert [o.stage_name for o in run.stage_outcomes] == ["validate-version"]
        assert fake.calls == []

        mailer.send.assert_called_once()
        subject, body = mailer.send.call_args.args[2:]
        assert subject.startswith("❌ FAILURE")
        assert "#dc3545" in body

    def test_invalid_version_ignores_previous_report(self, tmp_path):
        """잘못된 버전: 이전 실행 리포트 보관/게시 없음"""
        workspace = tmp_path / "workspace"
        workspace.mkdir()
        (workspace / "trivy-report.html").write_text("<html>old</html>", encoding="utf-8")
        mailer = Mock(spec=Mailer)
        pipeline = ReleasePipeline(_make_settings(tmp_path), mailer=mailer)

        with patch("src.tools.command.subprocess.run", side_effect=FakeProcesses()):
            run = pipeline.run(_make_params("1.2"))

        assert run.report_artifact_path is None
        assert not (tmp_path / "archive").exists()
        assert not (tmp_path / "reports").exists()
        body = mailer.send.call_args.args[3]
        assert "Vulnerability report" not in body

    def test_install_failure_aborts(self, tmp_path):
        """npm install 실패 시 이후 도구 미호출"""
        fake = FakeProcesses(failing={"npm": 1})
        pipeline = ReleasePipeline(_make_settings(tmp_path), mailer=Mock(spec=Mailer))

        with patch("src.tools.command.subprocess.run", side_effect=fake):
            run = pipeline.run(_make_params("1.0.0"))

        assert run.final_status == RunStatus.FAILURE
        assert run.stage_outcomes[-1].stage_name == "install"
        assert fake.tools_called() == ["git", "npm"]

    def test_sonar_token_masked_in_failure(self, tmp_path):
        """정적 분석 실패 메시지에 토큰 노출 없음"""

        def leaking(args, **kwargs):
            if args[0] == "sonar-scanner":
                return subprocess.CompletedProcess(args, 2, stdout="", stderr="bad token squ_secret")
            return subprocess.CompletedProcess(args, 0, stdout="", stderr="")

        pipeline = ReleasePipeline(_make_settings(tmp_path), mailer=Mock(spec=Mailer))

        with patch("src.tools.command.subprocess.run", side_effect=leaking):
            run = pipeline.run(_make_params("1.0.0"))

        reason = run.get_outcome("static-analysis").reason
        assert "squ_secret" not in reason
        assert "****" in reason

    def test_send_email_false(self, tmp_path):
        """SEND_EMAIL=false: 메일러 미호출"""
        mailer = Mock(spec=Mailer)
        pipeline = ReleasePipeline(_make_settings(tmp_path), mailer=mailer)

        with patch("src.tools.command.subprocess.run", side_effect=FakeProcesses()):
            run = pipeline.run(_make_params("1.2.3", send_email=False))

        assert run.final_status == RunStatus.SUCCESS
        mailer.send.assert_not_called()

    def test_mail_failure_keeps_status(self, tmp_path):
        """메일 발송 실패는 실행 상태에 영향 없음"""
        mailer = Mock(spec=Mailer)
        mailer.send.side_effect = RuntimeError("smtp down")
        pipeline = ReleasePipeline(_make_settings(tmp_path), mailer=mailer)

        with patch("src.tools.command.subprocess.run", side_effect=FakeProcesses()):
            run = pipeline.run(_make_params("1.2.3"))

        assert run.final_status == RunStatus.SUCCESS


class TestMain:
    """CLI 진입점 테스트"""

    def setup_method(self):
        Config.reset()

    def teardown_method(self):
        Config.reset()

    def _run_main(self, argv, run_succeeded: bool = True):
        fake_run = Mock()
        fake_run.succeeded = run_succeeded
        fake_run.final_status = RunStatus.SUCCESS if run_succeeded else RunStatus.FAILURE
        fake_run.stage_outcomes = []
        fake_run.report_artifact_path = None

        pipeline = Mock()
        pipeline.run.return_value = fake_run

        with patch("src.orchestrator.pipeline.setup_logger_from_config"), \
             patch("src.orchestrator.pipeline.ReleasePipeline.from_config", return_value=pipeline):
            code = main(argv)
        return code, pipeline

    def test_success_exit_code(self):
        """성공 시 0"""
        code, pipeline = self._run_main(["--version", "1.2.3", "--environment", "qa", "--no-send-email"])

        assert code == 0
        params = pipeline.run.call_args.args[0]
        assert params.release_version == "1.2.3"
        assert params.environment == Environment.QA
        assert params.send_email is False

    def test_failure_exit_code(self):
        """실행 실패 시 1"""
        code, _ = self._run_main(["--version", "1.2.3"], run_succeeded=False)
        assert code == 1

    def test_skip_flags_forwarded(self):
        """건너뛰기 옵션 전달"""
        _, pipeline = self._run_main(["--version", "1.2.3", "--skip-preflight", "--skip-tests"])

        kwargs = pipeline.run.call_args.kwargs
        assert kwargs == {"skip_preflight": True, "skip_tests": True}

    def test_missing_version_exit_code(self, monkeypatch):
        """버전 누락 시 2, 파이프라인 미실행"""
        monkeypatch.delenv("RELEASE_VERSION", raising=False)

        code, pipeline = self._run_main([])

        assert code == 2
        pipeline.run.assert_not_called()

    def test_missing_config_exit_code(self, tmp_path):
        """설정 파일 없음 시 2, 파이프라인 미생성"""
        with patch("src.orchestrator.pipeline.ReleasePipeline.from_config") as from_config:
            code = main(["--version", "1.2.3", "--config-dir", str(tmp_path)])

        assert code == 2
        from_config.assert_not_called()

    def test_config_dir_option(self, tmp_path):
        """--config-dir 지정 디렉토리 사용"""
        (tmp_path / "settings.yaml").write_text("app:\n  name: custom\n", encoding="utf-8")

        code, _ = self._run_main(["--version", "1.2.3", "--config-dir", str(tmp_path)])

        assert code == 0
        assert Config().get("app.name") == "custom"

    def test_invalid_environment_exit_code(self):
        """허용되지 않은 환경 시 2"""
        code, pipeline = self._run_main(["--version", "1.2.3", "--environment", "moon"])

        assert code == 2
        pipeline.run.assert_not_called()

    @pytest.mark.parametrize("value,expected", [("false", False), ("true", True)])
    def test_send_email_from_environment(self, monkeypatch, value, expected):
        """SEND_EMAIL 환경변수 사용"""
        monkeypatch.setenv("SEND_EMAIL", value)

        _, pipeline = self._run_main(["--version", "1.2.3"])

        assert pipeline.run.call_args.args[0].send_email is expected
