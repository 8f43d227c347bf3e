"""Ball-by-ball event records.

Every entry in a match's event log is one of three tagged variants,
discriminated by ``kind``. Events are validated whenever they enter the
log, whether through the scoring endpoint or a PATCH of ``ballByBall``.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field

from cricket_pro.models.base import CamelModel, UtcDatetime, utcnow


class ExtraType(str, Enum):
    """Deliveries that award runs outside the batsman's account."""

    WIDE = "wide"
    NO_BALL = "no_ball"
    BYE = "bye"
    LEG_BYE = "leg_bye"

    @property
    def is_legal(self) -> bool:
        """Byes and leg-byes count toward the over; wides and no-balls don't."""
        return self not in (ExtraType.WIDE, ExtraType.NO_BALL)


class _BallEventBase(CamelModel):
    innings: int = Field(ge=1)
    over: int = Field(ge=0)  # 0-indexed over the delivery belongs to
    ball: int = Field(ge=1, le=6)  # Ball within the over
    runs: int = Field(default=0, ge=0)
    batting_team: str | None = None
    batsman_id: str | None = None
    bowler_id: str | None = None
    timestamp: UtcDatetime = Field(default_factory=utcnow)


class RunEvent(_BallEventBase):
    kind: Literal["run"] = "run"


class ExtraEvent(_BallEventBase):
    kind: Literal["extra"] = "extra"
    extra_type: ExtraType


class WicketEvent(_BallEventBase):
    kind: Literal["wicket"] = "wicket"
    dismissal: str | None = None  # bowled, caught, lbw, run_out, ...


BallEvent = Annotated[Union[RunEvent, ExtraEvent, WicketEvent], Field(discriminator="kind")]
