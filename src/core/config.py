"""
설정 관리 모듈

설정 레이어 (뒤가 앞을 덮어씀):
1. config/settings.yaml
2. config/settings.{env}.yaml
3. CI 서버 변수 (JOB_NAME, BUILD_NUMBER, ...)
4. PIPELINE_ 접두사 환경변수 (PIPELINE_MAIL__SMTP_HOST -> mail.smtp_host)
"""
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from src.core.exceptions import ConfigError, ConfigNotFoundError, ConfigValidationError


# CI 서버가 주입하는 변수 -> 설정 키
CI_ENV_KEYS = {
    "JOB_NAME": "build.job_name",
    "BUILD_NUMBER": "build.number",
    "BUILD_URL": "build.url",
    "SONAR_TOKEN": "sonar.token",
    "SONAR_HOST_URL": "sonar.server_url",
}

ENV_PREFIX = "PIPELINE_"
LEVEL_SEPARATOR = "__"

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "config"


def read_yaml(path: Path) -> dict[str, Any]:
    """YAML 파일을 dict로 읽기 (빈 파일은 {})"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML 파싱 오류: {path}", {"error": str(e)})

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigValidationError(f"설정 파일 최상위는 매핑이어야 합니다: {path}")
    return data


def merge_layers(base: dict, override: Mapping) -> dict:
    """두 설정 레이어를 재귀 병합한 새 dict 반환"""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = merge_layers(current, value)
        else:
            merged[key] = value
    return merged


def env_layer(environ: Mapping[str, str]) -> dict[str, Any]:
    """환경변수에서 오버라이드 레이어 구성 (빈 값은 무시)"""
    layer: dict[str, Any] = {}

    for env_key, config_key in CI_ENV_KEYS.items():
        if environ.get(env_key):
            _put(layer, config_key.split("."), environ[env_key])

    for env_key, value in environ.items():
        if not env_key.startswith(ENV_PREFIX) or not value:
            continue
        path = env_key[len(ENV_PREFIX):].lower().split(LEVEL_SEPARATOR)
        if all(path):
            _put(layer, path, value)

    return layer


def _put(target: dict, path: list[str], value: Any) -> None:
    for key in path[:-1]:
        if not isinstance(target.get(key), dict):
            target[key] = {}
        target = target[key]
    target[path[-1]] = value


class Config:
    """
    설정 관리자

    사용법:
        config = Config()  # 기본: development 환경
        config = Config(env="production")

        server = config.get("sonar.server_url")
        mail = config.get_section("mail")

    파이프라인 구성 요소는 Config를 직접 읽지 않고
    PipelineSettings.from_config(config)로 변환된 값을 받는다.
    """

    _instance: "Config | None" = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs) -> "Config":
        """싱글톤 패턴"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(
        self,
        env: str | None = None,
        config_dir: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        if Config._initialized:
            return

        # .env는 이미 설정된 환경변수를 덮어쓰지 않음
        load_dotenv()
        environ = os.environ if environ is None else environ

        self.env = env or environ.get("APP_ENV", "development")
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
        self.loaded_files: list[Path] = []
        self._config = self._load(environ)

        Config._initialized = True

    def _load(self, environ: Mapping[str, str]) -> dict[str, Any]:
        base_path = self.config_dir / "settings.yaml"
        if not base_path.exists():
            raise ConfigNotFoundError(f"기본 설정 파일을 찾을 수 없습니다: {base_path}")

        config = read_yaml(base_path)
        self.loaded_files.append(base_path)

        env_path = self.config_dir / f"settings.{self.env}.yaml"
        if env_path.exists():
            config = merge_layers(config, read_yaml(env_path))
            self.loaded_files.append(env_path)

        return merge_layers(config, env_layer(environ))

    def get(self, key: str, default: Any = None) -> Any:
        """
        설정 값 조회 (점 표기법 지원)

        Args:
            key: 설정 키 (예: "sonar.server_url", "mail.sender")
            default: 기본값

        Returns:
            설정 값 또는 기본값
        """
        current: Any = self._config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def get_required(self, key: str) -> Any:
        """
        필수 설정 값 조회

        Raises:
            ConfigValidationError: 값이 없거나 빈 문자열인 경우
        """
        value = self.get(key)
        if value is None or value == "":
            raise ConfigValidationError(f"필수 설정 값이 없습니다: {key}")
        return value

    def get_section(self, section: str) -> dict[str, Any]:
        """섹션 전체 조회 (없거나 비어 있으면 {})"""
        value = self.get(section)
        return dict(value) if isinstance(value, dict) else {}

    @property
    def is_production(self) -> bool:
        """운영 환경 여부"""
        return self.env == "production"

    @classmethod
    def reset(cls) -> None:
        """싱글톤 인스턴스 리셋 (테스트용)"""
        cls._instance = None
        cls._initialized = False


def get_config() -> Config:
    """Config 인스턴스 반환 (편의 함수)"""
    return Config()
