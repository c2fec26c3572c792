"""Headless battle simulation: runners and telemetry."""

from capymon.sim.runner import AGENTS, BatchRunner, BattleRunner, make_agent
from capymon.sim.telemetry import BatchSummary, BattleTelemetry

__all__ = [
    "AGENTS",
    "make_agent",
    "BattleRunner",
    "BatchRunner",
    "BattleTelemetry",
    "BatchSummary",
]
