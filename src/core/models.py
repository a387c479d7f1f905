"""
도메인 모델

- ReleaseParameters: 실행 입력 파라미터 (불변)
- StageOutcome: 단계별 실행 결과
- PipelineRun: 1회 실행 컨텍스트 (StageRunner만 변경)
- NotificationContext: 알림 렌더링용 읽기 전용 투영
"""
from dataclasses import dataclass, field
from datetime import datetime

from src.core.exceptions import RunStateError
from src.core.interfaces import Environment, OutcomeKind, RunStatus


@dataclass(frozen=True)
class ReleaseParameters:
    """릴리스 입력 파라미터"""
    release_version: str
    repo_url: str
    environment: Environment
    branch: str = "main"
    send_email: bool = True

    def to_dict(self) -> dict:
        return {
            "release_version": self.release_version,
            "repo_url": self.repo_url,
            "branch": self.branch,
            "environment": self.environment.value,
            "send_email": self.send_email,
        }


@dataclass
class StageOutcome:
    """단계 실행 결과"""
    stage_name: str
    kind: OutcomeKind
    reason: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @classmethod
    def success(cls, stage_name: str, **kwargs) -> "StageOutcome":
        return cls(stage_name=stage_name, kind=OutcomeKind.SUCCESS, **kwargs)

    @classmethod
    def soft_failure(cls, stage_name: str, reason: str, **kwargs) -> "StageOutcome":
        return cls(stage_name=stage_name, kind=OutcomeKind.SOFT_FAILURE, reason=reason, **kwargs)

    @classmethod
    def hard_failure(cls, stage_name: str, reason: str, **kwargs) -> "StageOutcome":
        return cls(stage_name=stage_name, kind=OutcomeKind.HARD_FAILURE, reason=reason, **kwargs)

    @property
    def is_hard_failure(self) -> bool:
        return self.kind == OutcomeKind.HARD_FAILURE

    @property
    def duration_seconds(self) -> float:
        """실행 시간 (초)"""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return 0.0

    def to_dict(self) -> dict:
        return {
            "stage": self.stage_name,
            "outcome": self.kind.value,
            "duration": f"{self.duration_seconds:.1f}s",
            "reason": self.reason,
        }


@dataclass
class PipelineRun:
    """
    파이프라인 1회 실행 컨텍스트

    실행 시작 시 생성되고, StageRunner가 결과를 추가하며,
    단계 시퀀스 종료(또는 중단) 시 finalize()로 상태가 고정된다.
    """
    parameters: ReleaseParameters
    image_name: str
    stage_outcomes: list[StageOutcome] = field(default_factory=list)
    final_status: RunStatus | None = None
    report_artifact_path: str | None = None
    report_url: str | None = None
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: datetime | None = None
    aborted: bool = False

    @property
    def is_finalized(self) -> bool:
        return self.final_status is not None

    @property
    def succeeded(self) -> bool:
        return self.final_status == RunStatus.SUCCESS

    @property
    def duration_seconds(self) -> float:
        if self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return 0.0

    def append(self, outcome: StageOutcome) -> None:
        """단계 결과 추가 (확정 후에는 불가)"""
        if self.is_finalized:
            raise RunStateError(
                "확정된 실행에 단계 결과를 추가할 수 없습니다",
                {"stage": outcome.stage_name},
            )
        self.stage_outcomes.append(outcome)

    def finalize(self, aborted: bool = False) -> RunStatus:
        """최종 상태 확정 (HARD_FAILURE 또는 중단 시 FAILURE)"""
        if self.is_finalized:
            raise RunStateError("이미 확정된 실행입니다", {"status": self.final_status.value})

        self.aborted = aborted
        has_hard_failure = any(o.is_hard_failure for o in self.stage_outcomes)
        if aborted or has_hard_failure:
            self.final_status = RunStatus.FAILURE
        else:
            self.final_status = RunStatus.SUCCESS
        self.completed_at = datetime.now()
        return self.final_status

    def get_outcome(self, stage_name: str) -> StageOutcome | None:
        """특정 단계 결과 조회"""
        for outcome in self.stage_outcomes:
            if outcome.stage_name == stage_name:
                return outcome
        return None

    def to_summary(self) -> dict:
        """요약 정보 반환"""
        return {
            "status": self.final_status.value if self.final_status else None,
            "image_name": self.image_name,
            "version": self.parameters.release_version,
            "environment": self.parameters.environment.value,
            "duration": f"{self.duration_seconds:.1f}s",
            "stages": [o.to_dict() for o in self.stage_outcomes],
            "report": self.report_artifact_path,
        }


@dataclass(frozen=True)
class NotificationContext:
    """알림 본문 렌더링에 필요한 필드"""
    job_name: str
    build_number: str
    branch: str
    environment: str
    version: str
    build_url: str
    status: str
    accent_color: str
    image_name: str = ""
    report_url: str | None = None

    @property
    def console_url(self) -> str:
        """빌드 로그 링크"""
        if not self.build_url:
            return ""
        return self.build_url.rstrip("/") + "/console"
