"""
Stage Runner: 단계 순차 실행기

선언된 순서대로 단계를 실행하고 실패 정책에 따라 결과를 기록
- strict: 실패 시 HARD_FAILURE 기록 후 남은 단계 중단
- tolerant: 실패 시 경고 로그, SOFT_FAILURE 기록 후 계속
"""
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from src.core.interfaces import FailurePolicy, RunStatus
from src.core.logger import get_logger
from src.core.models import PipelineRun, StageOutcome


@dataclass(frozen=True)
class Stage:
    """이름과 실패 정책을 가진 실행 단위"""
    name: str
    action: Callable[[], object]
    policy: FailurePolicy = FailurePolicy.STRICT

    @classmethod
    def strict(cls, name: str, action: Callable[[], object]) -> "Stage":
        return cls(name=name, action=action, policy=FailurePolicy.STRICT)

    @classmethod
    def tolerant(cls, name: str, action: Callable[[], object]) -> "Stage":
        return cls(name=name, action=action, policy=FailurePolicy.TOLERANT)


class StageRunner:
    """
    단계 순차 실행기

    사용법:
        runner = StageRunner()
        stages = [
            Stage.strict("install", package_manager.install),
            Stage.tolerant("vulnerability-scan", scan),
        ]
        status = runner.run(run, stages)
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def _run_stage(self, stage: Stage) -> StageOutcome:
        """단일 단계 실행 및 정책 적용"""
        started_at = datetime.now()
        self.logger.info(f"[{stage.name}] 시작")

        try:
            stage.action()

        except Exception as e:
            completed_at = datetime.now()
            if stage.policy == FailurePolicy.TOLERANT:
                self.logger.warning(f"[{stage.name}] 실패 (계속 진행): {e}")
                return StageOutcome.soft_failure(
                    stage.name, str(e), started_at=started_at, completed_at=completed_at
                )

            self.logger.error(f"[{stage.name}] 실패: {e}")
            return StageOutcome.hard_failure(
                stage.name, str(e), started_at=started_at, completed_at=completed_at
            )

        outcome = StageOutcome.success(
            stage.name, started_at=started_at, completed_at=datetime.now()
        )
        self.logger.info(f"[{stage.name}] 완료 ({outcome.duration_seconds:.1f}s)")
        return outcome

    def run(self, run: PipelineRun, stages: list[Stage]) -> RunStatus:
        """
        단계 목록 실행 후 실행 상태 확정

        Args:
            run: 실행 컨텍스트 (결과가 추가됨)
            stages: 선언 순서대로 실행할 단계

        Returns:
            확정된 RunStatus
        """
        aborted = False

        for index, stage in enumerate(stages):
            outcome = self._run_stage(stage)
            run.append(outcome)

            if outcome.is_hard_failure:
                skipped = [s.name for s in stages[index + 1:]]
                if skipped:
                    self.logger.warning(f"남은 단계 중단: {', '.join(skipped)}")
                aborted = True
                break

        status = run.finalize(aborted=aborted)
        self.logger.info(f"단계 실행 종료: {status.value}")
        return status
