"""
Git 소스 체크아웃 어댑터
"""
from pathlib import Path

from src.core.exceptions import CheckoutError, ToolError
from src.core.interfaces import SourceControl
from src.core.logger import get_logger
from src.tools.command import CommandRunner


class GitSourceControl(SourceControl):
    """
    git clone / fetch 기반 체크아웃

    작업 디렉토리가 이미 clone된 상태면 fetch + checkout,
    아니면 지정 브랜치를 얕게 clone 한다.
    """

    def __init__(self, runner: CommandRunner, workspace: str | Path, executable: str = "git"):
        self.logger = get_logger(self.__class__.__name__)
        self.runner = runner
        self.workspace = Path(workspace)
        self.executable = executable

    def checkout(self, repo_url: str, branch: str) -> None:
        if not repo_url:
            raise CheckoutError("저장소 URL이 지정되지 않았습니다", tool="git")

        git = self.executable
        try:
            if (self.workspace / ".git").exists():
                self.logger.info(f"기존 저장소 갱신: {repo_url} ({branch})")
                # origin 대신 항상 지정 URL에서 fetch
                self.runner.run([git, "fetch", "--depth", "1", repo_url, branch], tool="git", cwd=self.workspace)
                self.runner.run([git, "checkout", "-B", branch, "FETCH_HEAD"], tool="git", cwd=self.workspace)
            else:
                self.workspace.mkdir(parents=True, exist_ok=True)
                self.logger.info(f"저장소 clone: {repo_url} ({branch})")
                self.runner.run(
                    [git, "clone", "--branch", branch, "--depth", "1", repo_url, str(self.workspace)],
                    tool="git",
                    cwd=self.workspace.parent,
                )
        except ToolError as e:
            raise CheckoutError(e.message, tool="git", returncode=e.returncode, output=e.output) from e
