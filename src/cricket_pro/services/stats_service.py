"""Derived statistics for players, teams and the dashboard."""

from dataclasses import dataclass

from cricket_pro.models.match import Match, MatchStatus, PlayerMatchStats
from cricket_pro.models.player import Player, PlayerStatsSummary
from cricket_pro.models.team import Team
from cricket_pro.utils.overs import BALLS_PER_OVER

RECENT_MATCHES_LIMIT = 3


def _ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    return round(numerator / denominator * scale, 1) if denominator > 0 else 0.0


def batting_average(runs: int, matches: int) -> float:
    """Runs per match played (no dismissal count is kept at career level)."""
    return _ratio(runs, matches)


def strike_rate(runs: int, balls_faced: int) -> float:
    return _ratio(runs, balls_faced, 100)


def bowling_average(runs_conceded: int, wickets: int) -> float:
    return _ratio(runs_conceded, wickets)


def economy(runs_conceded: int, balls_bowled: int) -> float:
    """Runs conceded per six-ball over."""
    return _ratio(runs_conceded, balls_bowled / BALLS_PER_OVER)


def player_summary(player: Player) -> PlayerStatsSummary:
    return PlayerStatsSummary(
        player_id=player.id,
        name=player.name,
        role=player.role,
        batting_average=batting_average(player.runs, player.matches),
        strike_rate=strike_rate(player.runs, player.balls_faced),
        bowling_average=bowling_average(player.runs_conceded, player.wickets),
        economy=economy(player.runs_conceded, player.balls_bowled),
    )


def parse_bowling_figures(figures: str | None) -> tuple[int, int]:
    """Parse ``"W/R"`` into (wickets, runs); malformed values count as 0/0."""
    try:
        wickets, runs = (figures or "0/0").split("/")
        return int(wickets), int(runs)
    except ValueError:
        return 0, 0


def _better_figures(new: tuple[int, int], best: tuple[int, int]) -> bool:
    # More wickets wins; equal wickets, fewer runs wins
    if best == (0, 0):
        return new != (0, 0)
    if new[0] != best[0]:
        return new[0] > best[0]
    return new[1] < best[1]


def apply_match_to_player(player: Player, stats: PlayerMatchStats) -> dict:
    """Career counter updates after one completed match."""
    updates = {
        "matches": player.matches + 1,
        "runs": player.runs + stats.runs,
        "balls_faced": player.balls_faced + stats.balls_faced,
        "fours": player.fours + stats.fours,
        "sixes": player.sixes + stats.sixes,
        "fifties": player.fifties + int(50 <= stats.runs < 100),
        "hundreds": player.hundreds + int(stats.runs >= 100),
        "high_score": max(player.high_score, stats.runs),
        "wickets": player.wickets + stats.wickets,
        "balls_bowled": player.balls_bowled + stats.balls_bowled,
        "runs_conceded": player.runs_conceded + stats.runs_conceded,
        "maidens": player.maidens + stats.maidens,
    }
    if stats.balls_bowled > 0:
        figures = (stats.wickets, stats.runs_conceded)
        if _better_figures(figures, parse_bowling_figures(player.best_bowling)):
            updates["best_bowling"] = f"{figures[0]}/{figures[1]}"
    return updates


@dataclass
class TeamStats:
    """Match record for one team, computed from stored matches."""

    team_id: str
    played: int
    completed: int
    wins: int
    losses: int
    ties: int
    win_rate: float

    def to_dict(self) -> dict:
        return {
            "teamId": self.team_id,
            "played": self.played,
            "completed": self.completed,
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "winRate": self.win_rate,
        }


def team_stats(team_id: str, matches: list[Match]) -> TeamStats:
    team_matches = [m for m in matches if team_id in (m.team1_id, m.team2_id)]
    completed = [m for m in team_matches if m.status == MatchStatus.COMPLETED]
    wins = sum(1 for m in completed if m.winner == team_id)
    ties = sum(1 for m in completed if m.winner is None)
    losses = len(completed) - wins - ties
    return TeamStats(
        team_id=team_id,
        played=len(team_matches),
        completed=len(completed),
        wins=wins,
        losses=losses,
        ties=ties,
        win_rate=_ratio(wins, len(completed), 100),
    )


def dashboard_summary(teams: list[Team], players: list, matches: list[Match]) -> dict:
    """Headline numbers for the dashboard.

    ``matches`` is expected most-recent first, as the repository lists them.
    """
    completed = [m for m in matches if m.status == MatchStatus.COMPLETED]
    live = next((m for m in matches if m.status == MatchStatus.IN_PROGRESS), None)
    decided = sum(1 for m in completed if m.winner)
    return {
        "totalTeams": len(teams),
        "totalPlayers": len(players),
        "totalMatches": len(matches),
        "completedMatches": len(completed),
        "decidedRate": round(decided / len(completed) * 100) if completed else 0,
        "currentMatch": live.model_dump(mode="json", by_alias=True) if live else None,
        "recentMatches": [
            m.model_dump(mode="json", by_alias=True) for m in completed[:RECENT_MATCHES_LIMIT]
        ],
    }
