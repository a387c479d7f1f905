"""
Orchestrator: 파이프라인 조율

단계를 순차 실행하고 실행 후처리(리포트 게시, 알림)를 전달
"""
from src.orchestrator.pipeline import ReleasePipeline, main
from src.orchestrator.stage_runner import Stage, StageRunner

__all__ = [
    "ReleasePipeline",
    "main",
    "Stage",
    "StageRunner",
]
