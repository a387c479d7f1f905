"""
리포트 게시

생성된 리포트 아티팩트가 있으면 보관/게시, 없으면 건너뜀
게시는 항상 best-effort: 실패해도 실행 상태에 영향을 주지 않는다
"""
import re
import shutil
from dataclasses import dataclass
from pathlib import Path

from src.core.exceptions import ArtifactError
from src.core.interfaces import ArtifactStore
from src.core.logger import get_logger


@dataclass
class PublishResult:
    """리포트 게시 결과"""
    path: str
    published: bool = False
    skipped: bool = False
    report_url: str | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "published": self.published,
            "skipped": self.skipped,
            "report_url": self.report_url,
            "error": self.error,
        }


class FileSystemArtifactStore(ArtifactStore):
    """
    로컬 디렉토리 기반 아티팩트 저장소

    archive: {archive_dir}/{파일명} 으로 복사
    publish_report: {reports_dir}/{리포트명 slug}/index.html 로 복사
    """

    def __init__(self, archive_dir: str | Path, reports_dir: str | Path, base_url: str = ""):
        self.archive_dir = Path(archive_dir)
        self.reports_dir = Path(reports_dir)
        self.base_url = base_url

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def archive(self, path: str) -> None:
        source = Path(path)
        try:
            self.archive_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, self.archive_dir / source.name)
        except OSError as e:
            raise ArtifactError(f"아티팩트 보관 실패: {path}", {"error": str(e)})

    def publish_report(self, path: str, name: str) -> str | None:
        slug = re.sub(r"[^A-Za-z0-9]+", "_", name).strip("_") or "report"
        target_dir = self.reports_dir / slug
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy2(Path(path), target_dir / "index.html")
        except OSError as e:
            raise ArtifactError(f"리포트 게시 실패: {path}", {"error": str(e)})

        if self.base_url:
            return f"{self.base_url.rstrip('/')}/{slug}/"
        return (target_dir / "index.html").resolve().as_uri()


class ReportPublisher:
    """
    리포트 게시기

    사용법:
        publisher = ReportPublisher(store, report_name="Trivy Vulnerability Report")
        result = publisher.publish("trivy-report.html")
    """

    def __init__(self, store: ArtifactStore, report_name: str):
        self.logger = get_logger(self.__class__.__name__)
        self.store = store
        self.report_name = report_name

    def publish(self, path: str) -> PublishResult:
        """
        리포트 게시 (예외를 던지지 않음)

        Args:
            path: 리포트 파일 경로

        Returns:
            PublishResult
        """
        result = PublishResult(path=path)

        try:
            if not self.store.exists(path):
                result.skipped = True
                self.logger.info(f"리포트 없음, 게시 건너뜀: {path}")
                return result

            self.store.archive(path)
            result.report_url = self.store.publish_report(path, self.report_name)
            result.published = True
            self.logger.info(f"리포트 게시 완료: {self.report_name} ({result.report_url})")

        except Exception as e:
            result.error = str(e)
            self.logger.warning(f"리포트 게시 실패 (무시): {e}")

        return result
