from typing import List, Optional, Sequence

from scoreboard.config import TIEBREAK_SET_SCORE
from scoreboard.engine import fold_points
from scoreboard.models import MatchState, PlayerId, Point


def _opponent(player: PlayerId, player_a: PlayerId, player_b: PlayerId) -> PlayerId:
    return player_b if player == player_a else player_a


def _server_for_games(
    games_played: int, first_server: PlayerId, player_a: PlayerId, player_b: PlayerId
) -> PlayerId:
    # Serve alternates every game
    if games_played % 2 == 0:
        return first_server
    return _opponent(first_server, player_a, player_b)


def _recorded(tiebreak_first_servers: Sequence[Optional[PlayerId]], index: int) -> Optional[PlayerId]:
    if index < len(tiebreak_first_servers):
        return tiebreak_first_servers[index]
    return None


def _ended_in_tiebreak(set_score) -> bool:
    high, low = TIEBREAK_SET_SCORE
    return tuple(set_score) in ((high, low), (low, high))


def tiebreak_first_server(
    state: MatchState,
    player_a: PlayerId,
    player_b: PlayerId,
    first_server: PlayerId,
    tiebreak_first_servers: Sequence[Optional[PlayerId]] = (),
) -> PlayerId:
    """Who serves the opening point of the tiebreak in the current set."""
    recorded = _recorded(tiebreak_first_servers, len(state.completed_sets))
    if recorded is not None:
        return recorded

    return _server_for_games(state.total_games_played, first_server, player_a, player_b)


def server_for_state(
    state: MatchState,
    player_a: PlayerId,
    player_b: PlayerId,
    first_server: PlayerId,
    tiebreak_first_servers: Sequence[Optional[PlayerId]] = (),
) -> PlayerId:
    if state.in_tiebreak:
        opener = tiebreak_first_server(
            state, player_a, player_b, first_server, tiebreak_first_servers
        )

        # Opener serves one point, then serve changes every two points
        points_played = state.current_game_score[0] + state.current_game_score[1]
        changes = (points_played + 1) // 2

        if changes % 2 == 0:
            return opener
        return _opponent(opener, player_a, player_b)

    if state.current_set_games == (0, 0) and state.completed_sets:
        if _ended_in_tiebreak(state.completed_sets[-1]):
            # Receiver of the first tiebreak point opens the next set
            opener = _recorded(tiebreak_first_servers, len(state.completed_sets) - 1)
            if opener is not None:
                return _opponent(opener, player_a, player_b)

    return _server_for_games(state.total_games_played, first_server, player_a, player_b)


def current_server(
    visible_points: Sequence[Point],
    player_a: PlayerId,
    player_b: PlayerId,
    first_server: PlayerId,
    tiebreak_first_servers: Sequence[Optional[PlayerId]] = (),
) -> PlayerId:
    """
    Return the player serving the next point after the visible prefix.

    Must be called again after every point; inside a tiebreak the server
    changes within the game.
    """
    state = fold_points(visible_points, player_a, player_b)
    return server_for_state(state, player_a, player_b, first_server, tiebreak_first_servers)


def detect_tiebreak_start(
    points_before: Sequence[Point],
    points_after: Sequence[Point],
    player_a: PlayerId,
    player_b: PlayerId,
    first_server: PlayerId,
    tiebreak_first_servers: Sequence[Optional[PlayerId]],
) -> List[Optional[PlayerId]]:
    """
    Record who serves first in a tiebreak that has just started.

    Compares the fold before and after a point. On a fresh entry into a
    tiebreak whose set index has no entry yet, the opener is appended at
    that index; skipped sets without a tiebreak are padded with None so
    index i always means "tiebreak after i completed sets".

    Always returns a new list. Idempotent for an already recorded set.
    """
    updated = list(tiebreak_first_servers)

    before = fold_points(points_before, player_a, player_b)
    after = fold_points(points_after, player_a, player_b)

    if before.in_tiebreak or not after.in_tiebreak:
        return updated

    set_index = len(after.completed_sets)
    if _recorded(updated, set_index) is not None:
        return updated

    # The tiebreak is served by whoever would serve the game after the
    # one that made it 6-6
    opener = _server_for_games(
        before.total_games_played + 1, first_server, player_a, player_b
    )

    while len(updated) < set_index:
        updated.append(None)

    if set_index < len(updated):
        updated[set_index] = opener
    else:
        updated.append(opener)

    return updated
