"""Over notation helpers.

Overs are written ``O.B``: completed overs, then balls into the current
over in tenths. ``3.4`` is three overs and four balls, i.e. 22 deliveries.
"""

BALLS_PER_OVER = 6

# Over limit per innings by format; formats not listed are unlimited
OVER_LIMITS = {"T20": 20, "ODI": 50}


def overs_to_balls(overs: float | int | None) -> int:
    """Convert ``O.B`` notation to a count of legal deliveries.

    Raises:
        ValueError: If the ball part is not between 0 and 5
    """
    if not overs:
        return 0
    completed = int(overs)
    balls = round((overs - completed) * 10)
    if not 0 <= balls < BALLS_PER_OVER:
        raise ValueError(f"Invalid overs value: {overs}")
    return completed * BALLS_PER_OVER + balls


def balls_to_overs(balls: int) -> float:
    """Convert a count of legal deliveries to ``O.B`` notation."""
    completed, remainder = divmod(balls, BALLS_PER_OVER)
    return round(completed + remainder / 10, 1)


def format_overs(overs: float) -> str:
    completed, remainder = divmod(overs_to_balls(overs), BALLS_PER_OVER)
    return f"{completed}.{remainder}"


def over_limit(match_format: str | None) -> int | None:
    """Overs per innings for a format, or None when unlimited (Test)."""
    if not match_format:
        return None
    return OVER_LIMITS.get(match_format.upper())
