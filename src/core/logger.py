"""
로깅 서비스

loguru 기반 구조화된 로깅
- 콘솔: 색상 포함, 단계 로그 ([stage] 시작/완료/실패)
- 파일: pipeline.log (전체), error.log (ERROR 이상)
"""
import sys
from pathlib import Path
from typing import Any

from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<level>{message}</level>"
)

# 파일 싱크는 색상 태그 없이 기록
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]} | {message}"

DEFAULT_LOGGER_NAME = "pipeline"


class LoggerService:
    """
    로깅 서비스

    사용법:
        from src.core.logger import get_logger

        logger = get_logger(__name__)
        logger.info("[checkout] 시작")
        logger.warning("[vulnerability-scan] 실패 (계속 진행)")
    """

    _configured: bool = False

    @classmethod
    def configure(
        cls,
        level: str = "INFO",
        log_dir: str = "./logs",
        log_format: str | None = None,
        file_enabled: bool = True,
        rotation: str = "10 MB",
        retention: str = "7 days",
    ) -> None:
        """
        로거 설정 (최초 1회만 적용)

        Args:
            level: 로그 레벨 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: 로그 파일 디렉토리
            log_format: 콘솔/파일 공통 포맷 (None이면 기본 포맷)
            file_enabled: 파일 로깅 활성화 여부
            rotation: 로그 파일 로테이션 크기
            retention: 로그 파일 보관 기간
        """
        if cls._configured:
            return

        logger.remove()
        logger.configure(extra={"name": DEFAULT_LOGGER_NAME})

        logger.add(sys.stderr, format=log_format or CONSOLE_FORMAT, level=level, colorize=True)

        if file_enabled:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)

            file_format = log_format or FILE_FORMAT
            for filename, sink_level in (("pipeline.log", level), ("error.log", "ERROR")):
                logger.add(
                    log_path / filename,
                    format=file_format,
                    level=sink_level,
                    rotation=rotation,
                    retention=retention,
                    compression="zip",
                    encoding="utf-8",
                )

        cls._configured = True

    @classmethod
    def reset(cls) -> None:
        """설정 리셋 (테스트용)"""
        logger.remove()
        cls._configured = False


def get_logger(name: str) -> Any:
    """
    모듈별 로거 반환

    Args:
        name: 모듈 이름 (보통 __name__ 또는 클래스명)

    Returns:
        name이 바인딩된 loguru logger
    """
    return logger.bind(name=name)


def setup_logger_from_config(config=None) -> None:
    """logging 섹션 기반 로거 초기화 (설정 로드 실패 시 기본값)"""
    from src.core.config import get_config
    from src.core.exceptions import ConfigError

    try:
        section = (config or get_config()).get_section("logging")
    except ConfigError:
        section = {}

    file_section = section.get("file") or {}
    LoggerService.configure(
        level=section.get("level", "INFO"),
        log_dir=section.get("log_dir", "./logs"),
        log_format=section.get("format"),
        file_enabled=file_section.get("enabled", True),
        rotation=file_section.get("rotation", "10 MB"),
        retention=file_section.get("retention", "7 days"),
    )
