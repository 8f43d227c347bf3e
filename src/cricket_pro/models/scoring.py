"""Scoring actions sent by the live scoring screen."""

from typing import Literal

from pydantic import Field, model_validator

from cricket_pro.models.base import CamelModel
from cricket_pro.models.events import ExtraType

ActionType = Literal["runs", "extra", "wicket", "end_innings", "end_match"]


class ScoringAction(CamelModel):
    """One button press on the scoring pad.

    ``runs`` for a wide or no-ball includes the one-run penalty, so a
    plain wide is ``{"type": "extra", "extraType": "wide"}`` (runs
    defaults to 1) and a wide that runs to the boundary is ``runs=5``.
    """

    type: ActionType
    runs: int = Field(default=0, ge=0, le=7)
    extra_type: ExtraType | None = None
    dismissal: str | None = None
    batsman_id: str | None = None
    bowler_id: str | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> "ScoringAction":
        if self.type == "extra":
            if self.extra_type is None:
                raise ValueError("extraType is required for extra deliveries")
            if "runs" not in self.model_fields_set:
                self.runs = 1
            if not self.extra_type.is_legal and self.runs < 1:
                raise ValueError("runs for a wide or no-ball include the one-run penalty")
        elif self.extra_type is not None:
            raise ValueError("extraType is only valid for extra deliveries")
        if self.type in ("runs", "wicket") and self.runs > 6:
            raise ValueError("runs must be between 0 and 6")
        return self

    @property
    def is_legal_delivery(self) -> bool:
        if self.type == "extra":
            return self.extra_type.is_legal
        return self.type in ("runs", "wicket")
