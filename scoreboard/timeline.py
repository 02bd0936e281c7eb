from typing import List, Optional, Sequence

from scoreboard.engine import fold_points
from scoreboard.formatter import format_match_state
from scoreboard.models import MatchSnapshot, PlayerId, Point
from scoreboard.server import detect_tiebreak_start, server_for_state


def build_match_timeline(
    points: Sequence[Point],
    player_a: PlayerId,
    player_b: PlayerId,
    first_server: PlayerId,
    tiebreak_first_servers: Optional[Sequence[Optional[PlayerId]]] = None,
) -> List[MatchSnapshot]:
    """
    Replays a match from scratch, one point at a time.
    Returns one snapshot per point; snapshot.server is who serves next.
    Does NOT mutate external state.
    """

    points = list(points)
    history = list(tiebreak_first_servers or [])
    end_state = fold_points(points, player_a, player_b)

    timeline: List[MatchSnapshot] = []

    for index, point in enumerate(points):

        history = detect_tiebreak_start(
            points[:index],
            points[:index + 1],
            player_a,
            player_b,
            first_server,
            history,
        )

        state = fold_points(points[:index + 1], player_a, player_b)

        snapshot = MatchSnapshot(
            point_index=index + 1,
            timestamp=point.timestamp,
            server=server_for_state(state, player_a, player_b, first_server, history),
            tiebreak_first_servers=tuple(history),
            state=format_match_state(state, player_a, player_b, end_state=end_state),
        )

        timeline.append(snapshot)

    return timeline
