"""
npm 의존성 설치 / 테스트 어댑터
"""
from pathlib import Path

from src.core.interfaces import PackageManager, TestRunner
from src.tools.command import CommandRunner


class NpmPackageManager(PackageManager):
    """npm install"""

    def __init__(self, runner: CommandRunner, workspace: str | Path, executable: str = "npm"):
        self.runner = runner
        self.workspace = Path(workspace)
        self.executable = executable

    def install(self) -> None:
        self.runner.run([self.executable, "install"], tool="npm", cwd=self.workspace)


class NpmTestRunner(TestRunner):
    """npm test"""

    def __init__(self, runner: CommandRunner, workspace: str | Path, executable: str = "npm"):
        self.runner = runner
        self.workspace = Path(workspace)
        self.executable = executable

    def run(self) -> None:
        self.runner.run([self.executable, "test"], tool="npm", cwd=self.workspace)
