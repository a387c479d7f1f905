"""
Docker 이미지 빌드 어댑터
"""
from pathlib import Path

from src.core.interfaces import ImageBuilder
from src.tools.command import CommandRunner


class DockerImageBuilder(ImageBuilder):
    """docker build -t {image}:{tag} {context}"""

    def __init__(self, runner: CommandRunner, workspace: str | Path, executable: str = "docker"):
        self.runner = runner
        self.workspace = Path(workspace)
        self.executable = executable

    def build(self, image_name: str, tag: str, context_path: str) -> None:
        self.runner.run(
            [self.executable, "build", "-t", f"{image_name}:{tag}", context_path],
            tool="docker",
            cwd=self.workspace,
        )
