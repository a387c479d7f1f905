"""
Release 모듈 - 입력 파라미터와 순수 규칙

- parameters: 릴리스 파라미터 파싱
- version: 버전 형식 검증
- environment: 환경별 이미지 이름 결정
"""
from src.release.version import VERSION_PATTERN, is_valid_version, validate_version
from src.release.environment import resolve_image_name
from src.release.parameters import parse_parameters, parse_environment, parse_bool

__all__ = [
    "VERSION_PATTERN",
    "is_valid_version",
    "validate_version",
    "resolve_image_name",
    "parse_parameters",
    "parse_environment",
    "parse_bool",
]
