"""Business logic services."""

from cricket_pro.services.scoring_service import ScoringError, ScoringService, apply_action

__all__ = ["ScoringError", "ScoringService", "apply_action"]
