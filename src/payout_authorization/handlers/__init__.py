"""Payout attempt orchestration."""

from payout_authorization.handlers.orchestrator import (
    AttemptState,
    PayoutOrchestrator,
    authorize_payout,
    create_orchestrator,
)

__all__ = ["AttemptState", "PayoutOrchestrator", "authorize_payout", "create_orchestrator"]
