from typing import Mapping, Optional, Sequence, Tuple

from scoreboard.config import (
    ADVANTAGE_LABEL,
    DEUCE_LABEL,
    EMPTY_SCORE,
    POINT_LABELS,
)
from scoreboard.engine import fold_points
from scoreboard.models import DerivedMatchState, MatchState, PlayerId, Point, Tally


NO_GAME_DISPLAY = (POINT_LABELS[0], POINT_LABELS[0])


def format_game_score(raw: Tally, is_tiebreak: bool) -> Tuple[str, str]:
    """
    Turn raw in-game point counts into display strings.

    Tiebreaks show plain integers. Regular games use 0/15/30/40 with
    deuce and advantage once both players reach 40.
    """
    a, b = raw

    if is_tiebreak:
        return str(a), str(b)

    forty = len(POINT_LABELS) - 1

    if a >= forty and b >= forty:
        if a == b:
            return DEUCE_LABEL, ""
        if a > b:
            return ADVANTAGE_LABEL, POINT_LABELS[forty]
        return POINT_LABELS[forty], ADVANTAGE_LABEL

    return POINT_LABELS[min(a, forty)], POINT_LABELS[min(b, forty)]


def join_display(display: Tuple[str, str]) -> str:
    left, right = display
    if not right:
        return left
    return f"{left}-{right}"


def display_name(player: PlayerId, names: Optional[Mapping[PlayerId, str]] = None) -> str:
    if names and player in names:
        return names[player]
    return str(player)


def build_score_string(
    completed_sets: Sequence[Tally],
    current_set_games: Tally,
    in_game_display: Tuple[str, str],
    is_tiebreak: bool,
) -> str:
    parts = [f"{a}-{b}" for a, b in completed_sets]

    game_started = tuple(in_game_display) != NO_GAME_DISPLAY

    if current_set_games != (0, 0) or game_started:
        parts.append(f"{current_set_games[0]}-{current_set_games[1]}")

        if is_tiebreak:
            parts.append(f"({in_game_display[0]}-{in_game_display[1]})")
        elif game_started:
            parts.append(join_display(in_game_display))

    if not parts:
        return EMPTY_SCORE

    return ", ".join(parts)


def determine_leader(
    state: MatchState, player_a: PlayerId, player_b: PlayerId
) -> Tuple[Optional[PlayerId], Optional[PlayerId]]:
    """
    Sets won dominate games in the current set, which dominate points
    in the current game. Returns (leader, trailer) or (None, None).
    """
    sets_a = sum(1 for a, b in state.completed_sets if a > b)
    sets_b = sum(1 for a, b in state.completed_sets if b > a)

    for a, b in (
        (sets_a, sets_b),
        state.current_set_games,
        state.current_game_score,
    ):
        if a != b:
            return (player_a, player_b) if a > b else (player_b, player_a)

    return None, None


def format_match_state(
    state: MatchState,
    player_a: PlayerId,
    player_b: PlayerId,
    end_state: Optional[MatchState] = None,
) -> DerivedMatchState:
    if end_state is None:
        end_state = state

    in_game_display = format_game_score(state.current_game_score, state.in_tiebreak)
    leader_id, trailer_id = determine_leader(state, player_a, player_b)

    return DerivedMatchState(
        set_scores=state.completed_sets,
        current_set_games=state.current_set_games,
        in_game_display=in_game_display,
        leader_id=leader_id,
        trailer_id=trailer_id,
        current_score_string=build_score_string(
            state.completed_sets,
            state.current_set_games,
            in_game_display,
            state.in_tiebreak,
        ),
        end_score_string=build_score_string(
            end_state.completed_sets,
            end_state.current_set_games,
            NO_GAME_DISPLAY,
            False,
        ),
        sets_and_games_only=build_score_string(
            state.completed_sets,
            state.current_set_games,
            NO_GAME_DISPLAY,
            False,
        ),
        in_tiebreak=state.in_tiebreak,
    )


def compute(
    visible_points: Sequence[Point],
    full_points: Sequence[Point],
    player_a: PlayerId,
    player_b: PlayerId,
) -> DerivedMatchState:
    """Derive display state for the visible prefix; end score comes from the full list."""
    visible_state = fold_points(visible_points, player_a, player_b)
    full_state = fold_points(full_points, player_a, player_b)

    return format_match_state(visible_state, player_a, player_b, end_state=full_state)
