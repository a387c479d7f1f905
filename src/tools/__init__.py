"""
Tools 모듈 - 외부 도구 어댑터

모든 어댑터는 CommandRunner를 통해 동기 subprocess 호출
"""
from src.tools.command import CommandRunner, CommandResult
from src.tools.git import GitSourceControl
from src.tools.npm import NpmPackageManager, NpmTestRunner
from src.tools.sonar import SonarScanner
from src.tools.docker import DockerImageBuilder
from src.tools.trivy import TrivyScanner

__all__ = [
    "CommandRunner",
    "CommandResult",
    "GitSourceControl",
    "NpmPackageManager",
    "NpmTestRunner",
    "SonarScanner",
    "DockerImageBuilder",
    "TrivyScanner",
]
