"""
외부 명령 실행기

subprocess로 외부 도구를 동기 호출하고 종료 코드로 성공/실패 판정
"""
import subprocess
from dataclasses import dataclass
from pathlib import Path

from src.core.exceptions import ToolError, ToolNotFoundError, ToolTimeoutError
from src.core.logger import get_logger


# 에러 메시지에 포함할 출력 길이
OUTPUT_TAIL_CHARS = 2000


@dataclass
class CommandResult:
    """명령 실행 결과"""
    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def output_tail(self) -> str:
        text = (self.stderr or self.stdout or "").strip()
        return text[-OUTPUT_TAIL_CHARS:]


class CommandRunner:
    """
    외부 명령 실행기

    사용법:
        runner = CommandRunner(cwd="./workspace", timeout=600)
        runner.run(["npm", "install"], tool="npm")
    """

    def __init__(
        self,
        cwd: str | Path | None = None,
        timeout: float | None = None,
        secrets: list[str] | None = None,
    ):
        self.logger = get_logger(self.__class__.__name__)
        self.cwd = str(cwd) if cwd is not None else None
        self.timeout = timeout
        self._secrets = [s for s in (secrets or []) if s]

    def mask(self, text: str) -> str:
        """로그/에러용 비밀 값 마스킹"""
        for secret in self._secrets:
            text = text.replace(secret, "****")
        return text

    def run(
        self,
        args: list[str],
        tool: str | None = None,
        cwd: str | Path | None = None,
    ) -> CommandResult:
        """
        명령 실행

        Args:
            args: 명령과 인자 목록 (shell 미사용)
            tool: 에러 보고용 도구 이름 (기본: args[0])
            cwd: 작업 디렉토리 (기본: 생성 시 지정값)

        Returns:
            CommandResult

        Raises:
            ToolNotFoundError: 실행 파일 없음
            ToolTimeoutError: 타임아웃
            ToolError: non-zero exit 또는 실행 실패
        """
        tool = tool or args[0]
        workdir = str(cwd) if cwd is not None else self.cwd
        display = self.mask(" ".join(args))
        self.logger.debug(f"$ {display}")

        try:
            completed = subprocess.run(
                args,
                cwd=workdir,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ToolNotFoundError(f"{tool} 실행 파일을 찾을 수 없습니다: {e}", tool=tool)
        except subprocess.TimeoutExpired:
            raise ToolTimeoutError(f"{tool} 타임아웃 ({self.timeout}초)", tool=tool)
        except OSError as e:
            raise ToolError(f"{tool} 실행 실패: {e}", tool=tool)

        result = CommandResult(
            args=list(args),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

        if result.returncode != 0:
            tail = self.mask(result.output_tail)
            raise ToolError(
                f"{tool} 실패 (exit {result.returncode}): {tail or 'Unknown error'}",
                tool=tool,
                returncode=result.returncode,
                output=tail,
            )

        return result
