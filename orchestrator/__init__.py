"""Strategy pipeline orchestration."""

from .service import (
    StrategyOrchestrator,
    build_orchestrator,
    ensure_configured,
)

__all__ = [
    "StrategyOrchestrator",
    "build_orchestrator",
    "ensure_configured",
]
