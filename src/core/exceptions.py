"""
커스텀 예외 클래스 정의

파이프라인 전 레이어에서 사용하는 표준화된 예외 처리
- Hard: 단계 시퀀스 중단 (ParameterError, ToolError, PreflightError)
- Soft: 발생 지점에서 로그만 남김 (ArtifactError, MailError)
"""
from typing import Any


class BaseError(Exception):
    """모든 커스텀 예외의 기본 클래스"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# ============================================
# Configuration Errors
# ============================================
class ConfigError(BaseError):
    """설정 관련 오류"""
    pass


class ConfigNotFoundError(ConfigError):
    """설정 파일을 찾을 수 없음"""
    pass


class ConfigValidationError(ConfigError):
    """설정 값 유효성 검증 실패"""
    pass


# ============================================
# Parameter Errors (입력 검증, pre-flight)
# ============================================
class ParameterError(BaseError):
    """릴리스 파라미터 관련 오류"""
    pass


class InvalidVersionError(ParameterError):
    """릴리스 버전 형식 오류 (X.Y.Z 아님)"""

    def __init__(self, given: str):
        super().__init__(
            f"유효하지 않은 릴리스 버전: {given!r} (형식: MAJOR.MINOR.PATCH)",
            {"given": given},
        )
        self.given = given


class InvalidEnvironmentError(ParameterError):
    """지원하지 않는 배포 환경"""

    def __init__(self, given: str, allowed: list[str] | None = None):
        super().__init__(
            f"지원하지 않는 환경: {given!r}",
            {"given": given, "allowed": allowed or []},
        )
        self.given = given


# ============================================
# External Tool Errors
# ============================================
class ToolError(BaseError):
    """외부 도구 호출 실패 (non-zero exit 또는 실행 불가)"""

    def __init__(
        self,
        message: str,
        tool: str = "",
        returncode: int | None = None,
        output: str = "",
    ):
        details: dict[str, Any] = {"tool": tool}
        if returncode is not None:
            details["returncode"] = returncode
        super().__init__(message, details)
        self.tool = tool
        self.returncode = returncode
        self.output = output


class CheckoutError(ToolError):
    """소스 체크아웃 실패"""
    pass


class ToolNotFoundError(ToolError):
    """실행 파일을 찾을 수 없음"""
    pass


class ToolTimeoutError(ToolError):
    """외부 도구 타임아웃"""
    pass


class PreflightError(BaseError):
    """Preflight 검사 실패"""
    pass


# ============================================
# Soft Errors
# ============================================
class ArtifactError(BaseError):
    """아티팩트 읽기/쓰기 실패"""
    pass


class MailError(BaseError):
    """메일 전송 실패"""
    pass


# ============================================
# Run State Errors
# ============================================
class RunStateError(BaseError):
    """확정된 PipelineRun 변경 시도"""
    pass
