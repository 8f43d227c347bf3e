"""Tests for ball-by-ball scoring."""

import pytest

from cricket_pro.models import (
    ExtraEvent,
    ExtraType,
    Match,
    MatchCreate,
    MatchStatus,
    PlayerCreate,
    RunEvent,
    ScoringAction,
    TeamCreate,
    WicketEvent,
)
from cricket_pro.repositories import MemoryRepository
from cricket_pro.services.scoring_service import (
    ScoringError,
    ScoringService,
    apply_action,
    choose_batting_first,
    result_text,
)


def live_match(**overrides) -> Match:
    """An in-progress T20 with Mumbai (t1) batting first."""
    fields = dict(
        id="m1",
        team1_id="t1",
        team2_id="t2",
        team1_name="Mumbai Indians",
        team2_name="Chennai Super Kings",
        format="T20",
        status=MatchStatus.IN_PROGRESS,
        batting_team="t1",
        bowling_team="t2",
    )
    fields.update(overrides)
    return Match(**fields)


def chase(**overrides) -> Match:
    """Second innings with Chennai (t2) chasing."""
    fields = dict(current_innings=2, batting_team="t2", bowling_team="t1")
    fields.update(overrides)
    return live_match(**fields)


def runs(n: int) -> ScoringAction:
    return ScoringAction(type="runs", runs=n)


def play(match: Match, *actions: ScoringAction) -> Match:
    for action in actions:
        match = apply_action(match, action)
    return match


class TestRuns:
    """Runs and the ball counter."""

    def test_worked_example(self):
        """4, 1, 6 from a fresh innings is 11 runs off three balls."""
        match = play(live_match(), runs(4), runs(1), runs(6))

        assert match.team1_score == 11
        assert match.team1_overs == 0.3
        assert [e.runs for e in match.ball_by_ball] == [4, 1, 6]
        assert [e.ball for e in match.ball_by_ball] == [1, 2, 3]
        assert all(isinstance(e, RunEvent) for e in match.ball_by_ball)

    def test_input_match_is_unchanged(self):
        match = live_match()

        apply_action(match, runs(4))

        assert match.team1_score == 0
        assert match.ball_by_ball == []

    def test_over_rolls_over_after_six_balls(self):
        match = apply_action(live_match(team1_overs=3.5), runs(1))

        assert match.team1_overs == 4.0
        assert match.ball_by_ball[0].over == 3
        assert match.ball_by_ball[0].ball == 6

    def test_dot_ball_advances_counter(self):
        match = apply_action(live_match(), runs(0))

        assert match.team1_score == 0
        assert match.team1_overs == 0.1

    def test_second_innings_scores_for_batting_team(self):
        match = apply_action(chase(team1_score=150), runs(4))

        assert match.team2_score == 4
        assert match.team2_overs == 0.1
        assert match.team1_score == 150

    def test_batting_side_falls_back_to_innings(self):
        """Without a recorded batting team, innings 1 belongs to team1."""
        match = apply_action(live_match(batting_team=None, bowling_team=None), runs(2))

        assert match.team1_score == 2
        assert match.batting_team == "t1"
        assert match.bowling_team == "t2"


class TestExtras:
    """Wides and no-balls don't count toward the over; byes do."""

    def test_wide_does_not_advance(self):
        match = apply_action(live_match(), ScoringAction(type="extra", extra_type=ExtraType.WIDE))

        assert match.team1_score == 1
        assert match.team1_overs == 0.0
        assert isinstance(match.ball_by_ball[0], ExtraEvent)
        assert match.ball_by_ball[0].extra_type == ExtraType.WIDE

    def test_no_ball_with_boundary(self):
        match = apply_action(
            live_match(), ScoringAction(type="extra", extra_type=ExtraType.NO_BALL, runs=5)
        )

        assert match.team1_score == 5
        assert match.team1_overs == 0.0

    def test_bye_advances(self):
        match = apply_action(
            live_match(), ScoringAction(type="extra", extra_type=ExtraType.BYE, runs=2)
        )

        assert match.team1_score == 2
        assert match.team1_overs == 0.1

    def test_ball_after_wide_is_same_ball_number(self):
        match = play(
            live_match(),
            ScoringAction(type="extra", extra_type=ExtraType.WIDE),
            runs(1),
        )

        assert [e.ball for e in match.ball_by_ball] == [1, 1]
        assert match.team1_overs == 0.1


class TestWickets:
    def test_wicket_counts_and_advances(self):
        match = apply_action(live_match(), ScoringAction(type="wicket", dismissal="bowled"))

        assert match.team1_wickets == 1
        assert match.team1_overs == 0.1
        assert isinstance(match.ball_by_ball[0], WicketEvent)
        assert match.ball_by_ball[0].dismissal == "bowled"

    def test_striker_cleared_when_dismissed(self):
        match = live_match(current_batsman1="b1", current_batsman2="b2", on_strike="b1")

        match = apply_action(match, ScoringAction(type="wicket", dismissal="caught"))

        assert match.on_strike is None
        assert match.current_batsman1 is None
        assert match.current_batsman2 == "b2"

    def test_non_striker_run_out_leaves_crease(self):
        match = live_match(current_batsman1="b1", current_batsman2="b2", on_strike="b1")

        match = apply_action(match, ScoringAction(type="wicket", dismissal="run_out", batsman_id="b2"))

        assert match.current_batsman2 is None
        assert match.current_batsman1 == "b1"
        assert match.on_strike == "b1"


class TestStrike:
    """Strike rotation between the two current batsmen."""

    @pytest.fixture
    def match(self):
        return live_match(current_batsman1="b1", current_batsman2="b2", on_strike="b1")

    def test_odd_runs_swap_strike(self, match):
        assert apply_action(match, runs(1)).on_strike == "b2"
        assert apply_action(match, runs(3)).on_strike == "b2"

    def test_even_runs_keep_strike(self, match):
        assert apply_action(match, runs(2)).on_strike == "b1"
        assert apply_action(match, runs(4)).on_strike == "b1"

    def test_end_of_over_swaps_strike(self, match):
        match.team1_overs = 0.5

        assert apply_action(match, runs(0)).on_strike == "b2"

    def test_single_off_last_ball_keeps_strike(self, match):
        match.team1_overs = 0.5

        assert apply_action(match, runs(1)).on_strike == "b1"

    def test_wide_penalty_does_not_swap(self, match):
        wide = ScoringAction(type="extra", extra_type=ExtraType.WIDE)

        assert apply_action(match, wide).on_strike == "b1"

    def test_no_ball_penalty_alone_keeps_strike(self, match):
        no_ball = ScoringAction(type="extra", extra_type=ExtraType.NO_BALL, runs=1)

        assert apply_action(match, no_ball).on_strike == "b1"

    def test_single_off_no_ball_swaps_strike(self, match):
        """Penalty plus one run actually taken."""
        no_ball = ScoringAction(type="extra", extra_type=ExtraType.NO_BALL, runs=2)

        assert apply_action(match, no_ball).on_strike == "b2"


class TestPlayerStats:
    """Per-player figures within the match."""

    @pytest.fixture
    def match(self):
        return live_match(
            current_batsman1="b1", current_batsman2="b2", on_strike="b1", current_bowler="w1"
        )

    def test_boundary_credited(self, match):
        match = play(match, runs(4), runs(6))

        batter = match.player_stats["b1"]
        assert (batter.runs, batter.balls_faced, batter.fours, batter.sixes) == (10, 2, 1, 1)
        bowler = match.player_stats["w1"]
        assert (bowler.balls_bowled, bowler.runs_conceded) == (2, 10)

    def test_wide_charged_to_bowler_only(self, match):
        match = apply_action(match, ScoringAction(type="extra", extra_type=ExtraType.WIDE))

        assert "b1" not in match.player_stats
        assert match.player_stats["w1"].runs_conceded == 1
        assert match.player_stats["w1"].balls_bowled == 0

    def test_byes_not_charged(self, match):
        match = apply_action(match, ScoringAction(type="extra", extra_type=ExtraType.BYE, runs=1))

        assert match.player_stats["b1"].balls_faced == 1
        assert match.player_stats["b1"].runs == 0
        assert match.player_stats["w1"].runs_conceded == 0

    def test_run_out_not_credited_to_bowler(self, match):
        match = apply_action(match, ScoringAction(type="wicket", dismissal="run_out"))

        assert match.player_stats["b1"].out is True
        assert match.player_stats["w1"].wickets == 0

    def test_bowled_credited_to_bowler(self, match):
        match = apply_action(match, ScoringAction(type="wicket", dismissal="bowled"))

        assert match.player_stats["w1"].wickets == 1
        assert match.player_stats["b1"].dismissal == "bowled"

    def test_maiden_over(self, match):
        match = play(match, *[runs(0) for _ in range(6)])

        assert match.player_stats["w1"].maidens == 1

    def test_over_with_runs_is_not_maiden(self, match):
        match = play(match, *[runs(0) for _ in range(5)], runs(2))

        assert match.player_stats["w1"].maidens == 0


class TestInningsTransitions:
    """Innings end manually or automatically."""

    def test_end_innings_switches_sides(self):
        match = live_match(current_batsman1="b1", current_bowler="w1", team1_score=160)

        match = apply_action(match, ScoringAction(type="end_innings"))

        assert match.current_innings == 2
        assert match.batting_team == "t2"
        assert match.bowling_team == "t1"
        assert match.current_batsman1 is None
        assert match.current_bowler is None
        assert match.status == MatchStatus.IN_PROGRESS

    def test_all_out_ends_innings(self):
        match = apply_action(live_match(team1_wickets=9), ScoringAction(type="wicket"))

        assert match.team1_wickets == 10
        assert match.current_innings == 2
        assert match.batting_team == "t2"

    def test_over_limit_ends_innings(self):
        match = apply_action(live_match(team1_overs=19.5), runs(1))

        assert match.team1_overs == 20.0
        assert match.current_innings == 2

    def test_test_match_has_no_over_limit(self):
        match = apply_action(live_match(format="Test", team1_overs=19.5), runs(1))

        assert match.current_innings == 1

    def test_scoring_finished_match_raises(self):
        with pytest.raises(ScoringError, match="not in progress"):
            apply_action(live_match(status=MatchStatus.COMPLETED), runs(1))

    def test_scoring_unstarted_match_raises(self):
        with pytest.raises(ScoringError):
            apply_action(live_match(status=MatchStatus.NOT_STARTED), runs(1))


class TestResults:
    """Match completion and the result text."""

    def test_chase_wins_by_wickets(self):
        match = apply_action(chase(team1_score=150, team2_score=148, team2_wickets=3), runs(4))

        assert match.status == MatchStatus.COMPLETED
        assert match.winner == "t2"
        assert match.result == "Chennai Super Kings won by 7 wickets"

    def test_defence_wins_by_runs(self):
        match = chase(team1_score=150, team2_score=140, team2_wickets=9)

        match = apply_action(match, ScoringAction(type="wicket"))

        assert match.status == MatchStatus.COMPLETED
        assert match.winner == "t1"
        assert match.result == "Mumbai Indians won by 10 runs"

    def test_overs_exhausted_in_chase_completes(self):
        match = apply_action(chase(team1_score=150, team2_score=120, team2_overs=19.5), runs(1))

        assert match.status == MatchStatus.COMPLETED
        assert match.result == "Mumbai Indians won by 29 runs"

    def test_singular_margins(self):
        by_run = apply_action(chase(team1_score=150, team2_score=149, team2_wickets=9), ScoringAction(type="wicket"))
        by_wicket = apply_action(chase(team1_score=150, team2_score=149, team2_wickets=9), runs(2))

        assert by_run.result == "Mumbai Indians won by 1 run"
        assert by_wicket.result == "Chennai Super Kings won by 1 wicket"

    def test_tie(self):
        match = apply_action(chase(team1_score=150, team2_score=150), ScoringAction(type="end_match"))

        assert match.winner is None
        assert match.result == "Match tied"
        assert match.status == MatchStatus.COMPLETED

    def test_team2_batting_first(self):
        """Team2 set the target, so team1 chased."""
        match = live_match(
            current_innings=2, batting_team="t1", bowling_team="t2",
            team1_score=100, team1_wickets=2, team2_score=180,
        )

        winner, text = result_text(match)

        assert winner == "t2"
        assert text == "Chennai Super Kings won by 80 runs"


class TestToss:
    """Choosing who bats first."""

    def test_winner_bats(self):
        match = live_match(toss_winner="t2", toss_decision="bat")
        assert choose_batting_first(match) == ("t2", "t1")

    def test_winner_bowls(self):
        match = live_match(toss_winner="t2", toss_decision="bowl")
        assert choose_batting_first(match) == ("t1", "t2")

    def test_no_toss_team1_bats(self):
        match = live_match(toss_winner=None)
        assert choose_batting_first(match) == ("t1", "t2")


class TestScoringService:
    """Scoring stored matches through the repository."""

    @pytest.fixture
    def repo(self):
        return MemoryRepository()

    @pytest.fixture
    def setup(self, repo):
        mi = repo.create_team(TeamCreate(name="Mumbai Indians", short_name="MI"))
        csk = repo.create_team(TeamCreate(name="Chennai Super Kings", short_name="CSK"))
        batter = repo.create_player(PlayerCreate(name="Ruturaj Gaikwad", role="batsman", team_id=csk.id))
        bowler = repo.create_player(PlayerCreate(name="Jasprit Bumrah", role="bowler", team_id=mi.id))
        match = repo.create_match(
            MatchCreate(
                team1_id=mi.id, team2_id=csk.id, team1_name=mi.name, team2_name=csk.name,
                format="T20", toss_winner=csk.id, toss_decision="bowl",
            )
        )
        return {"mi": mi, "csk": csk, "batter": batter, "bowler": bowler, "match": match}

    def test_start_uses_toss(self, repo, setup):
        service = ScoringService(repo)

        match = service.start_match(setup["match"].id)

        assert match.status == MatchStatus.IN_PROGRESS
        assert match.current_innings == 1
        assert match.batting_team == setup["mi"].id
        assert match.bowling_team == setup["csk"].id

    def test_start_twice_raises(self, repo, setup):
        service = ScoringService(repo)
        service.start_match(setup["match"].id)

        with pytest.raises(ScoringError, match="already started"):
            service.start_match(setup["match"].id)

    def test_missing_match_returns_none(self, repo):
        service = ScoringService(repo)

        assert service.start_match("missing") is None
        assert service.score("missing", runs(1)) is None

    def test_score_persists(self, repo, setup):
        service = ScoringService(repo)
        match_id = setup["match"].id
        service.start_match(match_id)

        service.score(match_id, runs(4))
        service.score(match_id, runs(1))

        stored = repo.get_match(match_id)
        assert stored.team1_score == 5
        assert stored.team1_overs == 0.2
        assert len(stored.ball_by_ball) == 2

    def test_completion_updates_career_counters(self, repo, setup):
        service = ScoringService(repo)
        match_id = setup["match"].id
        mi, csk = setup["mi"], setup["csk"]
        batter, bowler = setup["batter"], setup["bowler"]
        service.start_match(match_id)
        repo.update_match(
            match_id,
            {
                "team1_score": 10,
                "current_innings": 2,
                "batting_team": csk.id,
                "bowling_team": mi.id,
                "current_batsman1": batter.id,
                "on_strike": batter.id,
                "current_bowler": bowler.id,
            },
        )

        service.score(match_id, runs(6))
        final = service.score(match_id, runs(6))

        assert final.status == MatchStatus.COMPLETED
        assert final.winner == csk.id
        assert final.result == "Chennai Super Kings won by 10 wickets"

        winners = repo.get_team(csk.id)
        losers = repo.get_team(mi.id)
        assert (winners.matches, winners.wins, winners.losses) == (1, 1, 0)
        assert (losers.matches, losers.wins, losers.losses) == (1, 0, 1)

        batting = repo.get_player(batter.id)
        assert (batting.matches, batting.runs, batting.sixes, batting.high_score) == (1, 12, 2, 12)
        bowling = repo.get_player(bowler.id)
        assert (bowling.matches, bowling.balls_bowled, bowling.runs_conceded) == (1, 2, 12)

    def test_tie_counts_no_win_or_loss(self, repo, setup):
        service = ScoringService(repo)
        match_id = setup["match"].id
        service.start_match(match_id)
        repo.update_match(match_id, {"team1_score": 50, "team2_score": 50, "current_innings": 2})

        service.score(match_id, ScoringAction(type="end_match"))

        for team_id in (setup["mi"].id, setup["csk"].id):
            team = repo.get_team(team_id)
            assert (team.matches, team.wins, team.losses) == (1, 0, 0)
