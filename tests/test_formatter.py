import pytest

from scoreboard.formatter import (
    build_score_string,
    compute,
    determine_leader,
    format_game_score,
    format_match_state,
)
from scoreboard.models import MatchState, Point


A = "player_a"
B = "player_b"


def make_points(sequence):
    return [
        Point(
            winner=A if w == "a" else B,
            loser=B if w == "a" else A,
            type="ace",
            set_number=1,
            game_number=1,
            timestamp=i + 1,
        )
        for i, w in enumerate(sequence)
    ]


def games(winners):
    return "".join(w * 4 for w in winners)


SIX_ALL = games("ab" * 6)


# ---------- GAME DISPLAY ----------

@pytest.mark.parametrize("raw, expected", [
    ((0, 0), ("0", "0")),
    ((1, 0), ("15", "0")),
    ((2, 1), ("30", "15")),
    ((3, 0), ("40", "0")),
    ((3, 2), ("40", "30")),
    ((2, 3), ("30", "40")),
    ((3, 3), ("Deuce", "")),
    ((5, 5), ("Deuce", "")),
    ((4, 3), ("Ad", "40")),
    ((3, 4), ("40", "Ad")),
    ((7, 6), ("Ad", "40")),
])
def test_regular_game_display(raw, expected):
    assert format_game_score(raw, is_tiebreak=False) == expected


@pytest.mark.parametrize("raw, expected", [
    ((0, 0), ("0", "0")),
    ((3, 2), ("3", "2")),
    ((3, 3), ("3", "3")),
    ((10, 9), ("10", "9")),
])
def test_tiebreak_display_is_raw(raw, expected):
    assert format_game_score(raw, is_tiebreak=True) == expected


# ---------- SCORE STRING ----------

@pytest.mark.parametrize("completed, games_tally, display, tiebreak, expected", [
    ([], (0, 0), ("0", "0"), False, "0-0"),
    ([], (0, 0), ("40", "0"), False, "0-0, 40-0"),
    ([], (1, 0), ("0", "0"), False, "1-0"),
    ([], (0, 0), ("Deuce", ""), False, "0-0, Deuce"),
    ([], (2, 3), ("Ad", "40"), False, "2-3, Ad-40"),
    ([(6, 4)], (0, 0), ("0", "0"), False, "6-4"),
    ([(6, 4)], (2, 1), ("15", "0"), False, "6-4, 2-1, 15-0"),
    ([], (6, 6), ("3", "2"), True, "6-6, (3-2)"),
    ([(6, 4), (3, 6)], (6, 6), ("0", "0"), True, "6-4, 3-6, 6-6, (0-0)"),
])
def test_build_score_string(completed, games_tally, display, tiebreak, expected):
    assert build_score_string(completed, games_tally, display, tiebreak) == expected


# ---------- LEADER ----------

def test_no_leader_when_level():
    assert determine_leader(MatchState(), A, B) == (None, None)

    state = MatchState(
        completed_sets=((6, 4), (4, 6)),
        current_set_games=(2, 2),
        current_game_score=(1, 1),
    )
    assert determine_leader(state, A, B) == (None, None)


def test_sets_dominate_games():
    state = MatchState(
        completed_sets=((6, 4),),
        current_set_games=(0, 5),
        current_game_score=(0, 3),
    )
    assert determine_leader(state, A, B) == (A, B)


def test_games_dominate_points():
    state = MatchState(current_set_games=(1, 2), current_game_score=(3, 0))
    assert determine_leader(state, A, B) == (B, A)


def test_points_break_the_tie():
    state = MatchState(current_set_games=(3, 3), current_game_score=(2, 1))
    assert determine_leader(state, A, B) == (A, B)


# ---------- DERIVED STATE ----------

def test_empty_match_renders_zero():
    derived = compute([], [], A, B)

    assert derived.current_score_string == "0-0"
    assert derived.end_score_string == "0-0"
    assert derived.sets_and_games_only == "0-0"
    assert derived.in_game_display == ("0", "0")
    assert derived.leader_id is None
    assert derived.trailer_id is None
    assert derived.set_scores == ()


def test_forty_love_then_game():
    points = make_points("aaa")
    derived = compute(points, points, A, B)

    assert derived.in_game_display == ("40", "0")
    assert derived.current_score_string == "0-0, 40-0"
    assert derived.leader_id == A

    points = make_points("aaaa")
    derived = compute(points, points, A, B)

    assert derived.in_game_display == ("0", "0")
    assert derived.current_set_games == (1, 0)
    assert derived.current_score_string == "1-0"


def test_end_score_ignores_cursor_and_in_game_points():
    points = make_points("aaaa" + "bb")
    derived = compute(points[:3], points, A, B)

    assert derived.current_score_string == "0-0, 40-0"
    assert derived.sets_and_games_only == "0-0"
    assert derived.end_score_string == "1-0"


def test_tiebreak_switches_to_integers():
    points = make_points(SIX_ALL + "aaab")
    derived = compute(points, points, A, B)

    assert derived.in_tiebreak is True
    assert derived.in_game_display == ("3", "1")
    assert derived.current_score_string == "6-6, (3-1)"
    assert derived.sets_and_games_only == "6-6"


def test_completed_tiebreak_set():
    points = make_points(SIX_ALL + "ab" * 5 + "bb")
    derived = compute(points, points, A, B)

    assert derived.set_scores == ((6, 7),)
    assert derived.current_score_string == "6-7"
    assert derived.leader_id == B


def test_format_match_state_defaults_end_state():
    state = MatchState(completed_sets=((6, 1),), current_set_games=(2, 0), current_game_score=(1, 0))
    derived = format_match_state(state, A, B)

    assert derived.current_score_string == "6-1, 2-0, 15-0"
    assert derived.end_score_string == "6-1, 2-0"
