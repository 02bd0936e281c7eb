from typing import List, Mapping, Optional, Sequence

from scoreboard.config import (
    GAME_POINTS_TO_WIN,
    GAME_WON_TEMPLATE,
    PROGRESSION_SEPARATOR,
    POINT_LABELS,
    TIEBREAK_POINTS_TO_WIN,
    WIN_MARGIN,
)
from scoreboard.engine import fold_points
from scoreboard.formatter import display_name, format_game_score, join_display
from scoreboard.models import PlayerId, Point


Names = Optional[Mapping[PlayerId, str]]


# =========================================================
# GAME GROUPING
# =========================================================

def points_in_game(points: Sequence[Point], game_number: int) -> List[Point]:
    return [p for p in points if p.game_number == game_number]


def current_game_points(visible_points: Sequence[Point]) -> List[Point]:
    """Points of the game the last visible point belongs to."""
    if not visible_points:
        return []
    return points_in_game(visible_points, visible_points[-1].game_number)


def last_completed_game_points(visible_points: Sequence[Point]) -> List[Point]:
    if not visible_points:
        return []

    game_number = visible_points[-1].game_number - 1
    if game_number < 1:
        return []

    return points_in_game(visible_points, game_number)


# =========================================================
# DESCRIPTION
# =========================================================

def describe_point(point: Point, names: Names = None) -> str:
    """
    Who ended the point and how. Errors are credited to the player
    who made them, i.e. the loser.
    """
    if point.type == "ace":
        return f"{display_name(point.winner, names)} ace"
    if point.type == "winner":
        return f"{display_name(point.winner, names)} winner"
    if point.type == "double_fault":
        return f"{display_name(point.loser, names)} double fault"
    return f"{display_name(point.loser, names)} error"


def _game_won(a: int, b: int, is_tiebreak: bool) -> bool:
    target = TIEBREAK_POINTS_TO_WIN if is_tiebreak else GAME_POINTS_TO_WIN
    return max(a, b) >= target and abs(a - b) >= WIN_MARGIN


def game_progression(
    game_points: Sequence[Point],
    player_a: PlayerId,
    player_b: PlayerId,
    is_tiebreak: bool = False,
    names: Names = None,
) -> str:
    """
    Point-by-point story of one game, e.g.
    "0-0 → A ace → 15-0 → B error → 30-0 → ...".

    The step that closes the game reads "Game to <name>" instead of a score.
    """
    if not game_points:
        return ""

    steps = [f"{POINT_LABELS[0]}-{POINT_LABELS[0]}"]
    a = b = 0

    for point in game_points:
        if point.winner == player_a:
            a += 1
        else:
            b += 1

        steps.append(describe_point(point, names))

        if _game_won(a, b, is_tiebreak):
            leader = player_a if a > b else player_b
            steps.append(GAME_WON_TEMPLATE.format(display_name(leader, names)))
        else:
            steps.append(join_display(format_game_score((a, b), is_tiebreak)))

    return PROGRESSION_SEPARATOR.join(steps)


def current_game_progression(
    visible_points: Sequence[Point],
    player_a: PlayerId,
    player_b: PlayerId,
    names: Names = None,
) -> str:
    game = current_game_points(visible_points)
    if not game:
        return ""

    # The game is a tiebreak if the match was in one before its first point
    earlier = [p for p in visible_points if p.game_number < game[0].game_number]
    is_tiebreak = fold_points(earlier, player_a, player_b).in_tiebreak

    return game_progression(game, player_a, player_b, is_tiebreak, names)
