from typing import List, Mapping, Optional, Sequence, Tuple

from scoreboard.config import ERROR_POINT_TYPES, SERVER_POINT_TYPES
from scoreboard.engine import fold_points
from scoreboard.formatter import compute, display_name, format_match_state
from scoreboard.models import PlayerId, Point, PointCounts


def points_in_set(points: Sequence[Point], set_number: int) -> List[Point]:
    return [p for p in points if p.set_number == set_number]


def _tally(points) -> PointCounts:
    counts = {"ace": 0, "winner": 0, "double_fault": 0, "unforced_error": 0}
    for p in points:
        counts[p.type] += 1

    return PointCounts(
        aces=counts["ace"],
        winners=counts["winner"],
        double_faults=counts["double_fault"],
        unforced_errors=counts["unforced_error"],
    )


def points_won_breakdown(points: Sequence[Point], player: PlayerId) -> PointCounts:
    """
    Points the player won, by how they were won.
    Opponent errors show up here as double_faults / unforced_errors.
    """
    return _tally(p for p in points if p.winner == player)


def points_ended_breakdown(points: Sequence[Point], player: PlayerId) -> PointCounts:
    """
    Points ended by the player's own action: their aces and winners,
    plus the double faults and unforced errors they committed.
    """
    return _tally(
        p for p in points
        if (p.winner == player and p.type in SERVER_POINT_TYPES)
        or (p.loser == player and p.type in ERROR_POINT_TYPES)
    )


def points_won_totals(
    points: Sequence[Point], player_a: PlayerId, player_b: PlayerId
) -> Tuple[int, int]:
    won_a = sum(1 for p in points if p.winner == player_a)
    won_b = sum(1 for p in points if p.winner == player_b)
    return won_a, won_b


# ---------------------------------------------------------
# Summaries
# ---------------------------------------------------------

def set_summary(
    points: Sequence[Point],
    set_number: int,
    player_a: PlayerId,
    player_b: PlayerId,
    names: Optional[Mapping[PlayerId, str]] = None,
) -> Tuple[Optional[PlayerId], str]:
    """
    (winner, score) for one set.

    A finished set gives its winner and the games winner-first ("6-4").
    An unfinished one gives no winner and a line such as
    "player_a leads 3-2, 15-0 (incomplete set)" or "Tied 0-0 (incomplete set)".
    """
    state = fold_points(points_in_set(points, set_number), player_a, player_b)

    if state.completed_sets:
        games_a, games_b = state.completed_sets[0]
        if games_a > games_b:
            return player_a, f"{games_a}-{games_b}"
        return player_b, f"{games_b}-{games_a}"

    derived = format_match_state(state, player_a, player_b)

    if derived.leader_id is None:
        return None, f"Tied {derived.current_score_string} (incomplete set)"

    leader = display_name(derived.leader_id, names)
    return None, f"{leader} leads {derived.current_score_string} (incomplete set)"


def match_summary(
    points: Sequence[Point], player_a: PlayerId, player_b: PlayerId
) -> Tuple[Optional[PlayerId], str]:
    """(leader, end score) over the whole point list."""
    derived = compute(points, points, player_a, player_b)
    return derived.leader_id, derived.end_score_string
