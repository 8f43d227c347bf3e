"""Ball-by-ball scoring for live matches.

``apply_action`` is a pure function from (match, action) to the next match
state. ``ScoringService`` wraps it with repository reads and writes and,
when a match completes, folds the result into team and player counters.
"""

import logging
from datetime import datetime

from cricket_pro.models.base import utcnow
from cricket_pro.models.events import ExtraEvent, ExtraType, RunEvent, WicketEvent
from cricket_pro.models.match import Match, MatchStatus, PlayerMatchStats
from cricket_pro.models.scoring import ScoringAction
from cricket_pro.repositories.base import CricketRepository
from cricket_pro.services.stats_service import apply_match_to_player
from cricket_pro.utils.overs import BALLS_PER_OVER, balls_to_overs, over_limit, overs_to_balls

logger = logging.getLogger(__name__)

ALL_OUT_WICKETS = 10

# Dismissals not credited to the bowler
NON_BOWLER_DISMISSALS = {"run_out", "retired_hurt", "retired_out", "obstructing_the_field", "timed_out"}


class ScoringError(ValueError):
    """Raised when an action can't be applied to the match in its current state."""


def batting_side(match: Match) -> int:
    """Return 1 or 2: which team's score fields the batting side owns."""
    if match.batting_team and match.batting_team == match.team1_id:
        return 1
    if match.batting_team and match.batting_team == match.team2_id:
        return 2
    # No batting team recorded: team1 bats first
    return 2 if match.current_innings == 2 else 1


def _get(match: Match, side: int, field: str):
    return getattr(match, f"team{side}_{field}")


def _set(match: Match, side: int, field: str, value) -> None:
    setattr(match, f"team{side}_{field}", value)


def _side_team_id(match: Match, side: int) -> str:
    return match.team1_id if side == 1 else match.team2_id


def first_batting_side(match: Match) -> int:
    side = batting_side(match)
    return 3 - side if match.current_innings >= 2 else side


def choose_batting_first(match: Match) -> tuple[str, str]:
    """Batting and bowling team ids for innings 1, decided by the toss.

    Without a recorded toss winner, team1 bats first.
    """
    if match.toss_winner in (match.team1_id, match.team2_id):
        winner = match.toss_winner
        loser = match.team2_id if winner == match.team1_id else match.team1_id
        if match.toss_decision == "bowl":
            return loser, winner
        return winner, loser
    return match.team1_id, match.team2_id


def result_text(match: Match) -> tuple[str | None, str]:
    """Winner id and result string for a finished match.

    The chasing side wins by the wickets it had in hand; the side batting
    first wins by the run difference.
    """
    first = first_batting_side(match)
    chase = 3 - first
    first_score = _get(match, first, "score")
    chase_score = _get(match, chase, "score")

    if chase_score > first_score:
        winner = _side_team_id(match, chase)
        margin = max(ALL_OUT_WICKETS - _get(match, chase, "wickets"), 0)
        unit = "wicket" if margin == 1 else "wickets"
        return winner, f"{match.team_name(winner)} won by {margin} {unit}"
    if first_score > chase_score:
        winner = _side_team_id(match, first)
        margin = first_score - chase_score
        unit = "run" if margin == 1 else "runs"
        return winner, f"{match.team_name(winner)} won by {margin} {unit}"
    return None, "Match tied"


def _complete(match: Match) -> None:
    match.winner, match.result = result_text(match)
    match.status = MatchStatus.COMPLETED
    match.current_batsman1 = None
    match.current_batsman2 = None
    match.current_bowler = None
    match.on_strike = None


def _end_innings(match: Match) -> None:
    if match.current_innings >= 2:
        _complete(match)
        return

    side = batting_side(match)
    match.batting_team = _side_team_id(match, 3 - side)
    match.bowling_team = _side_team_id(match, side)
    match.current_innings = 2
    match.current_batsman1 = None
    match.current_batsman2 = None
    match.current_bowler = None
    match.on_strike = None


def _swap_strike(match: Match) -> None:
    if match.on_strike and match.on_strike == match.current_batsman1:
        match.on_strike = match.current_batsman2
    elif match.on_strike and match.on_strike == match.current_batsman2:
        match.on_strike = match.current_batsman1


def _stats(match: Match, player_id: str) -> PlayerMatchStats:
    if player_id not in match.player_stats:
        match.player_stats[player_id] = PlayerMatchStats()
    return match.player_stats[player_id]


def _record_player_stats(
    match: Match, action: ScoringAction, batsman_id: str | None, bowler_id: str | None
) -> None:
    extra = action.extra_type
    if batsman_id and extra != ExtraType.WIDE:
        batter = _stats(match, batsman_id)
        batter.balls_faced += 1
        if action.type in ("runs", "wicket"):
            batter.runs += action.runs
            if action.runs == 4:
                batter.fours += 1
            elif action.runs == 6:
                batter.sixes += 1
        if action.type == "wicket":
            batter.out = True
            batter.dismissal = action.dismissal

    if bowler_id:
        bowler = _stats(match, bowler_id)
        if action.is_legal_delivery:
            bowler.balls_bowled += 1
        if extra not in (ExtraType.BYE, ExtraType.LEG_BYE):
            bowler.runs_conceded += action.runs
        if action.type == "wicket" and action.dismissal not in NON_BOWLER_DISMISSALS:
            bowler.wickets += 1


def _is_maiden(match: Match, bowler_id: str, innings: int, over: int) -> bool:
    """True when the bowler's completed over conceded nothing off the bat or as wides/no-balls."""
    deliveries = [
        e for e in match.ball_by_ball
        if e.innings == innings and e.over == over and e.bowler_id == bowler_id
    ]
    if not deliveries:
        return False
    for event in deliveries:
        if isinstance(event, ExtraEvent):
            if not event.extra_type.is_legal:
                return False
            continue
        if event.runs:
            return False
    return True


def apply_action(match: Match, action: ScoringAction, now: datetime | None = None) -> Match:
    """Return the match state after one scoring action.

    Wides and no-balls add runs without advancing the ball counter; every
    other delivery advances it by one, rolling into the next over after six.
    An innings closes on ten wickets or the format's over limit, and the
    second innings also closes once the target is passed.

    Raises:
        ScoringError: If the match is not in progress
    """
    if match.status != MatchStatus.IN_PROGRESS:
        raise ScoringError(f"Match {match.id} is not in progress")

    updated = match.model_copy(deep=True)

    if action.type == "end_innings":
        _end_innings(updated)
        return updated
    if action.type == "end_match":
        _complete(updated)
        return updated

    side = batting_side(updated)
    if updated.batting_team is None:
        updated.batting_team = _side_team_id(updated, side)
        updated.bowling_team = _side_team_id(updated, 3 - side)

    balls_before = overs_to_balls(_get(updated, side, "overs"))
    over_index, ball_in_over = divmod(balls_before, BALLS_PER_OVER)
    batsman_id = action.batsman_id or updated.on_strike
    bowler_id = action.bowler_id or updated.current_bowler

    event_fields = dict(
        innings=updated.current_innings,
        over=over_index,
        ball=ball_in_over + 1,
        runs=action.runs,
        batting_team=updated.batting_team,
        batsman_id=batsman_id,
        bowler_id=bowler_id,
        timestamp=now or utcnow(),
    )
    if action.type == "extra":
        event = ExtraEvent(extra_type=action.extra_type, **event_fields)
    elif action.type == "wicket":
        event = WicketEvent(dismissal=action.dismissal, **event_fields)
    else:
        event = RunEvent(**event_fields)
    updated.ball_by_ball.append(event)

    _set(updated, side, "score", _get(updated, side, "score") + action.runs)
    if action.type == "wicket":
        _set(updated, side, "wickets", _get(updated, side, "wickets") + 1)

    balls_after = balls_before + 1 if action.is_legal_delivery else balls_before
    _set(updated, side, "overs", balls_to_overs(balls_after))

    _record_player_stats(updated, action, batsman_id, bowler_id)

    # Runs the batsmen actually ran; the wide/no-ball penalty isn't one
    ran = action.runs
    if action.extra_type in (ExtraType.WIDE, ExtraType.NO_BALL):
        ran = max(action.runs - 1, 0)
    if action.type == "wicket":
        # The dismissed batsman may be the non-striker (run out)
        if batsman_id:
            if updated.current_batsman1 == batsman_id:
                updated.current_batsman1 = None
            elif updated.current_batsman2 == batsman_id:
                updated.current_batsman2 = None
            if updated.on_strike == batsman_id:
                updated.on_strike = None
    elif ran % 2 == 1:
        _swap_strike(updated)

    over_completed = action.is_legal_delivery and balls_after % BALLS_PER_OVER == 0
    if over_completed:
        _swap_strike(updated)
        if bowler_id and _is_maiden(updated, bowler_id, updated.current_innings, over_index):
            _stats(updated, bowler_id).maidens += 1

    limit = over_limit(updated.format)
    innings_over = _get(updated, side, "wickets") >= ALL_OUT_WICKETS or (
        limit is not None and balls_after >= limit * BALLS_PER_OVER
    )
    target_passed = (
        updated.current_innings >= 2
        and _get(updated, side, "score") > _get(updated, 3 - side, "score")
    )
    if target_passed or (innings_over and updated.current_innings >= 2):
        _complete(updated)
    elif innings_over:
        _end_innings(updated)

    return updated


class ScoringService:
    """Applies scoring actions to stored matches."""

    def __init__(self, repository: CricketRepository):
        self.repository = repository

    def start_match(self, match_id: str) -> Match | None:
        """Move a scheduled match to in-progress with innings 1 set up from the toss.

        Returns:
            The updated match, or None if it doesn't exist

        Raises:
            ScoringError: If the match has already started
        """
        match = self.repository.get_match(match_id)
        if match is None:
            return None
        if match.status != MatchStatus.NOT_STARTED:
            raise ScoringError(f"Match {match_id} has already started")

        batting, bowling = choose_batting_first(match)
        logger.info(f"Starting match {match_id}: {match.team_name(batting)} batting first")
        return self.repository.update_match(
            match_id,
            {
                "status": MatchStatus.IN_PROGRESS,
                "current_innings": 1,
                "batting_team": batting,
                "bowling_team": bowling,
            },
        )

    def score(self, match_id: str, action: ScoringAction) -> Match | None:
        """Apply one action and persist the result.

        Returns:
            The updated match, or None if it doesn't exist

        Raises:
            ScoringError: If the match is not in progress
        """
        match = self.repository.get_match(match_id)
        if match is None:
            return None

        updated = apply_action(match, action)
        stored = self.repository.update_match(
            match_id, updated.model_dump(exclude={"id", "created_at"})
        )

        if updated.status == MatchStatus.COMPLETED:
            logger.info(f"Match {match_id} completed: {updated.result}")
            self._record_result(updated)
        return stored

    def _record_result(self, match: Match) -> None:
        """Fold a completed match into team and player career counters."""
        for team_id in (match.team1_id, match.team2_id):
            team = self.repository.get_team(team_id)
            if team is None:
                logger.warning(f"Match {match.id} references missing team {team_id}")
                continue
            won = match.winner == team_id
            lost = match.winner is not None and not won
            self.repository.update_team(
                team_id,
                {
                    "matches": team.matches + 1,
                    "wins": team.wins + int(won),
                    "losses": team.losses + int(lost),
                },
            )

        for player_id, stats in match.player_stats.items():
            player = self.repository.get_player(player_id)
            if player is None:
                logger.warning(f"Match {match.id} has stats for missing player {player_id}")
                continue
            self.repository.update_player(player_id, apply_match_to_player(player, stats))
