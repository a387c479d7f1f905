"""
Trivy 이미지 취약점 스캔 어댑터
"""
from pathlib import Path

from src.core.interfaces import VulnerabilityScanner
from src.tools.command import CommandRunner


class TrivyScanner(VulnerabilityScanner):
    """trivy image --format template 로 HTML 리포트 생성"""

    def __init__(self, runner: CommandRunner, workspace: str | Path, executable: str = "trivy"):
        self.runner = runner
        self.workspace = Path(workspace)
        self.executable = executable

    def scan(self, image_name: str, tag: str, template_path: str, output_path: str) -> None:
        # trivy는 템플릿 파일 경로에 "@" 접두사를 요구
        template = template_path if template_path.startswith("@") else f"@{template_path}"
        self.runner.run(
            [
                self.executable,
                "image",
                "--format", "template",
                "--template", template,
                "-o", output_path,
                f"{image_name}:{tag}",
            ],
            tool="trivy",
            cwd=self.workspace,
        )
