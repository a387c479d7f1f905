"""
핵심 인터페이스 정의

파이프라인 코어가 소비하는 외부 협력자 인터페이스와 공통 Enum
모든 메서드는 동기 호출이며 실패 시 구조화된 예외를 던진다
"""
from abc import ABC, abstractmethod
from enum import Enum


# ============================================
# Enums
# ============================================
class Environment(Enum):
    """배포 대상 환경"""
    DEV = "dev"
    QA = "qa"
    STAGING = "staging"
    PROD = "prod"

    @classmethod
    def values(cls) -> list[str]:
        return [e.value for e in cls]


class RunStatus(Enum):
    """실행 최종 상태"""
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


class FailurePolicy(Enum):
    """단계 실패 정책"""
    STRICT = "strict"      # 실패 시 남은 단계 중단
    TOLERANT = "tolerant"  # 실패 시 경고 후 계속


class OutcomeKind(Enum):
    """단계 실행 결과 유형"""
    SUCCESS = "success"
    SOFT_FAILURE = "soft_failure"
    HARD_FAILURE = "hard_failure"


# ============================================
# Abstract Interfaces
# ============================================
class SourceControl(ABC):
    """소스 체크아웃 인터페이스"""

    @abstractmethod
    def checkout(self, repo_url: str, branch: str) -> None:
        """저장소 체크아웃 (실패 시 CheckoutError)"""
        pass


class PackageManager(ABC):
    """의존성 설치 인터페이스"""

    @abstractmethod
    def install(self) -> None:
        pass


class TestRunner(ABC):
    """테스트 실행 인터페이스"""

    __test__ = False

    @abstractmethod
    def run(self) -> None:
        pass


class StaticAnalysis(ABC):
    """정적 분석 인터페이스"""

    @abstractmethod
    def scan(
        self,
        project_key: str,
        project_name: str,
        server_url: str,
        auth_token: str,
        sources_path: str,
        exclusions: str,
    ) -> None:
        pass


class ImageBuilder(ABC):
    """컨테이너 이미지 빌드 인터페이스"""

    @abstractmethod
    def build(self, image_name: str, tag: str, context_path: str) -> None:
        pass


class VulnerabilityScanner(ABC):
    """이미지 취약점 스캔 인터페이스"""

    @abstractmethod
    def scan(
        self,
        image_name: str,
        tag: str,
        template_path: str,
        output_path: str,
    ) -> None:
        pass


class ArtifactStore(ABC):
    """아티팩트 저장소 인터페이스"""

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def archive(self, path: str) -> None:
        """아티팩트 보관 (실패 시 ArtifactError)"""
        pass

    @abstractmethod
    def publish_report(self, path: str, name: str) -> str | None:
        """리포트 게시, 열람 가능한 URL 반환 (없으면 None)"""
        pass


class Mailer(ABC):
    """메일 전송 인터페이스"""

    @abstractmethod
    def send(self, sender: str, to: str, subject: str, html_body: str) -> None:
        """메일 전송 (실패 시 MailError)"""
        pass
