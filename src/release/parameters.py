"""
릴리스 파라미터 파싱

CLI 인자 > 프로세스 환경변수(CI 파라미터) > 기본값 순으로 결정
"""
import os
from collections.abc import Mapping

from src.core.exceptions import InvalidEnvironmentError, ParameterError
from src.core.interfaces import Environment
from src.core.models import ReleaseParameters


PARAMETER_ENV_KEYS = {
    "release_version": "RELEASE_VERSION",
    "repo_url": "GIT_REPO_URL",
    "branch": "BRANCH",
    "environment": "ENVIRONMENT",
    "send_email": "SEND_EMAIL",
}

DEFAULT_BRANCH = "main"
DEFAULT_ENVIRONMENT = Environment.DEV

_TRUE_VALUES = ("1", "true", "yes", "y", "on")
_FALSE_VALUES = ("0", "false", "no", "n", "off")


def parse_environment(value: str | Environment) -> Environment:
    """환경 문자열을 Environment로 변환"""
    if isinstance(value, Environment):
        return value
    try:
        return Environment(str(value).strip().lower())
    except ValueError:
        raise InvalidEnvironmentError(str(value), Environment.values())


def parse_bool(value: str | bool, name: str = "value") -> bool:
    """불리언 파라미터 파싱"""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ParameterError(f"불리언 값이 아닙니다: {name}={value!r}")


def parse_parameters(
    overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ReleaseParameters:
    """
    릴리스 파라미터 구성

    버전 형식 검증은 파이프라인의 첫 단계(validate-version)에서 수행하므로
    여기서는 존재 여부만 확인한다.

    Args:
        overrides: CLI 등에서 명시적으로 전달된 값 (None 값은 무시)
        environ: 환경변수 매핑 (기본: os.environ)

    Returns:
        ReleaseParameters

    Raises:
        ParameterError: 필수 값 누락 또는 형식 오류
    """
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    environ = os.environ if environ is None else environ

    def lookup(name: str, default=None):
        if name in overrides:
            return overrides[name]
        value = environ.get(PARAMETER_ENV_KEYS[name])
        return value if value not in (None, "") else default

    release_version = lookup("release_version")
    if release_version is None:
        raise ParameterError(
            "RELEASE_VERSION이 지정되지 않았습니다",
            {"env": PARAMETER_ENV_KEYS["release_version"]},
        )

    return ReleaseParameters(
        release_version=str(release_version),
        repo_url=str(lookup("repo_url", "")),
        branch=str(lookup("branch", DEFAULT_BRANCH)),
        environment=parse_environment(lookup("environment", DEFAULT_ENVIRONMENT)),
        send_email=parse_bool(lookup("send_email", True), "SEND_EMAIL"),
    )
