"""
릴리스 버전 검증

MAJOR.MINOR.PATCH 세 개의 정수 그룹만 허용
pre-release/build-metadata 접미사(-beta, +build)는 허용하지 않음
"""
import re

from src.core.exceptions import InvalidVersionError


VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+", re.ASCII)


def is_valid_version(version: str) -> bool:
    """버전 문자열 형식 여부"""
    if not isinstance(version, str):
        return False
    return VERSION_PATTERN.fullmatch(version) is not None


def validate_version(version: str) -> None:
    """
    릴리스 버전 검증

    Args:
        version: 검사할 버전 문자열 (예: "1.2.3")

    Raises:
        InvalidVersionError: 형식이 맞지 않는 경우
    """
    if not is_valid_version(version):
        raise InvalidVersionError(version)
