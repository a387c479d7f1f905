"""
Release 모듈 테스트

버전 검증, 환경별 이미지 이름, 파라미터 파싱
"""
import pytest

from src.core.exceptions import InvalidEnvironmentError, InvalidVersionError, ParameterError
from src.core.interfaces import Environment
from src.release import (
    is_valid_version,
    parse_bool,
    parse_environment,
    parse_parameters,
    resolve_image_name,
    validate_version,
)


class TestVersionValidator:
    """버전 검증 테스트"""

    @pytest.mark.parametrize("version", ["0.0.0", "1.2.3", "10.20.30", "001.2.3", "1.0.999999"])
    def test_valid_versions(self, version):
        """세 개 정수 그룹은 통과"""
        validate_version(version)
        assert is_valid_version(version) is True

    @pytest.mark.parametrize(
        "version",
        ["", "1.0", "1.0.0-beta", "v1.0.0", "1.0.0 ", " 1.0.0", "1.0.0\n", "1.0.0+build", "1..0", "a.b.c", "1.0.0.0"],
    )
    def test_invalid_versions(self, version):
        """접미사/접두사/공백 포함 시 실패"""
        with pytest.raises(InvalidVersionError) as exc_info:
            validate_version(version)

        assert exc_info.value.given == version
        assert is_valid_version(version) is False

    def test_non_ascii_digits_rejected(self):
        """유니코드 숫자는 허용하지 않음"""
        assert is_valid_version("١.٢.٣") is False

    def test_non_string_rejected(self):
        """문자열이 아니면 실패"""
        assert is_valid_version(None) is False

    def test_error_details(self):
        """에러에 입력값 포함"""
        with pytest.raises(InvalidVersionError) as exc_info:
            validate_version("1.2")

        assert exc_info.value.details["given"] == "1.2"
        assert "1.2" in str(exc_info.value)


class TestEnvironmentResolver:
    """환경별 이미지 이름 테스트"""

    @pytest.mark.parametrize("env", [Environment.DEV, Environment.QA, Environment.STAGING])
    def test_non_prod_prefixed(self, env):
        """prod 외 환경은 접두사 추가"""
        assert resolve_image_name("hello-world-nodejs", env) == f"{env.value}-hello-world-nodejs"

    def test_prod_unchanged(self):
        """prod는 기본 이름 그대로"""
        assert resolve_image_name("hello-world-nodejs", Environment.PROD) == "hello-world-nodejs"

    def test_prod_idempotent(self):
        """prod 반복 적용 시 동일"""
        once = resolve_image_name("app", Environment.PROD)
        assert resolve_image_name(once, Environment.PROD) == once

    def test_string_environment(self):
        """문자열 환경값도 허용"""
        assert resolve_image_name("app", "dev") == "dev-app"

    def test_dev_scenario(self):
        """dev 환경 이미지 이름"""
        assert resolve_image_name("hello-world-nodejs", Environment.DEV) == "dev-hello-world-nodejs"


class TestParameters:
    """파라미터 파싱 테스트"""

    def test_from_environ(self):
        """환경변수에서 파라미터 구성"""
        params = parse_parameters(environ={
            "RELEASE_VERSION": "1.2.3",
            "GIT_REPO_URL": "https://example.com/repo.git",
            "BRANCH": "develop",
            "ENVIRONMENT": "qa",
            "SEND_EMAIL": "false",
        })

        assert params.release_version == "1.2.3"
        assert params.repo_url == "https://example.com/repo.git"
        assert params.branch == "develop"
        assert params.environment == Environment.QA
        assert params.send_email is False

    def test_defaults(self):
        """BRANCH/ENVIRONMENT/SEND_EMAIL 기본값"""
        params = parse_parameters(environ={"RELEASE_VERSION": "1.0.0"})

        assert params.branch == "main"
        assert params.environment == Environment.DEV
        assert params.send_email is True

    def test_overrides_take_precedence(self):
        """명시 값이 환경변수보다 우선"""
        params = parse_parameters(
            {"release_version": "2.0.0", "environment": "prod", "branch": None},
            environ={"RELEASE_VERSION": "1.0.0", "ENVIRONMENT": "dev", "BRANCH": "release"},
        )

        assert params.release_version == "2.0.0"
        assert params.environment == Environment.PROD
        assert params.branch == "release"

    def test_invalid_version_not_rejected_here(self):
        """형식 검증은 파이프라인 단계에서 수행"""
        params = parse_parameters(environ={"RELEASE_VERSION": "1.2"})
        assert params.release_version == "1.2"

    def test_missing_version(self):
        """RELEASE_VERSION 누락"""
        with pytest.raises(ParameterError):
            parse_parameters(environ={})

    def test_invalid_environment(self):
        """지원하지 않는 환경"""
        with pytest.raises(InvalidEnvironmentError) as exc_info:
            parse_parameters(environ={"RELEASE_VERSION": "1.0.0", "ENVIRONMENT": "uat"})

        assert "prod" in exc_info.value.details["allowed"]

    def test_parameters_immutable(self):
        """파라미터는 불변"""
        params = parse_parameters(environ={"RELEASE_VERSION": "1.0.0"})
        with pytest.raises(AttributeError):
            params.release_version = "2.0.0"

    def test_parse_environment_case_insensitive(self):
        """대소문자 무시"""
        assert parse_environment(" PROD ") == Environment.PROD

    @pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("no", False), (False, False)])
    def test_parse_bool(self, value, expected):
        """불리언 파싱"""
        assert parse_bool(value) is expected

    def test_parse_bool_invalid(self):
        """불리언이 아닌 값"""
        with pytest.raises(ParameterError):
            parse_bool("maybe", "SEND_EMAIL")
