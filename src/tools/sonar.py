"""
SonarQube 정적 분석 어댑터
"""
from pathlib import Path

from src.core.interfaces import StaticAnalysis
from src.tools.command import CommandRunner


class SonarScanner(StaticAnalysis):
    """
    sonar-scanner CLI 호출

    토큰은 -Dsonar.token 으로 전달되며 로그/에러에서는 마스킹된다
    """

    def __init__(self, runner: CommandRunner, workspace: str | Path, executable: str = "sonar-scanner"):
        self.runner = runner
        self.workspace = Path(workspace)
        self.executable = executable

    def build_args(
        self,
        project_key: str,
        project_name: str,
        server_url: str,
        auth_token: str,
        sources_path: str,
        exclusions: str,
    ) -> list[str]:
        args = [
            self.executable,
            f"-Dsonar.projectKey={project_key}",
            f"-Dsonar.projectName={project_name}",
            f"-Dsonar.host.url={server_url}",
            f"-Dsonar.sources={sources_path}",
        ]
        if exclusions:
            args.append(f"-Dsonar.exclusions={exclusions}")
        if auth_token:
            args.append(f"-Dsonar.token={auth_token}")
        return args

    def scan(
        self,
        project_key: str,
        project_name: str,
        server_url: str,
        auth_token: str,
        sources_path: str,
        exclusions: str,
    ) -> None:
        args = self.build_args(
            project_key, project_name, server_url, auth_token, sources_path, exclusions
        )
        self.runner.run(args, tool="sonar-scanner", cwd=self.workspace)
