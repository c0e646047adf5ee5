"""Orchestrator - history building over archived and live captures."""

from .runner import HistoryBuilder, HistoryState, RunStats, build_history, build_pipeline

__all__ = [
    "HistoryBuilder",
    "HistoryState",
    "RunStats",
    "build_history",
    "build_pipeline",
]
