"""
Core 모듈 - 공통 인프라

- config: 설정 관리
- settings: 불변 파이프라인 설정
- logger: 로깅 서비스
- exceptions: 커스텀 예외
- interfaces: 핵심 인터페이스
- models: 도메인 모델
- preflight: 실행 전 환경 검사
"""
from src.core.config import Config, get_config
from src.core.logger import get_logger, LoggerService, setup_logger_from_config
from src.core.settings import (
    PipelineSettings,
    BuildInfo,
    ImageSettings,
    SonarSettings,
    ScanSettings,
    MailSettings,
    ToolSettings,
    ArtifactSettings,
)
from src.core.exceptions import (
    BaseError,
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    ParameterError,
    InvalidVersionError,
    InvalidEnvironmentError,
    ToolError,
    CheckoutError,
    ToolNotFoundError,
    ToolTimeoutError,
    PreflightError,
    ArtifactError,
    MailError,
    RunStateError,
)
from src.core.interfaces import (
    Environment,
    RunStatus,
    FailurePolicy,
    OutcomeKind,
    SourceControl,
    PackageManager,
    TestRunner,
    StaticAnalysis,
    ImageBuilder,
    VulnerabilityScanner,
    ArtifactStore,
    Mailer,
)
from src.core.models import (
    ReleaseParameters,
    StageOutcome,
    PipelineRun,
    NotificationContext,
)

__all__ = [
    # Config
    "Config",
    "get_config",
    "PipelineSettings",
    "BuildInfo",
    "ImageSettings",
    "SonarSettings",
    "ScanSettings",
    "MailSettings",
    "ToolSettings",
    "ArtifactSettings",
    # Logger
    "get_logger",
    "LoggerService",
    "setup_logger_from_config",
    # Exceptions
    "BaseError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "ParameterError",
    "InvalidVersionError",
    "InvalidEnvironmentError",
    "ToolError",
    "CheckoutError",
    "ToolNotFoundError",
    "ToolTimeoutError",
    "PreflightError",
    "ArtifactError",
    "MailError",
    "RunStateError",
    # Interfaces
    "Environment",
    "RunStatus",
    "FailurePolicy",
    "OutcomeKind",
    "SourceControl",
    "PackageManager",
    "TestRunner",
    "StaticAnalysis",
    "ImageBuilder",
    "VulnerabilityScanner",
    "ArtifactStore",
    "Mailer",
    # Models
    "ReleaseParameters",
    "StageOutcome",
    "PipelineRun",
    "NotificationContext",
]
