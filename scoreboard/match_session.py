import logging
from typing import Dict, List, Optional, Sequence

from scoreboard.config import POINT_TYPES, SERVER_POINT_TYPES
from scoreboard.engine import current_game_number, current_set_number, fold_points
from scoreboard.exceptions import (
    InvalidPlayerError,
    InvalidPointTypeError,
    MatchValidationError,
    TimestampOrderError,
)
from scoreboard.formatter import compute
from scoreboard.models import DerivedMatchState, MatchSnapshot, PlayerId, Point
from scoreboard.server import current_server, detect_tiebreak_start
from scoreboard.timeline import build_match_timeline


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("winner", "loser", "type", "set_number", "game_number", "timestamp")


class MatchSession:
    """
    Single local match session.

    Responsibilities:
    - Own the ordered point list, the cursor and the tiebreak history
    - Rewind / redo by moving the cursor, never by deleting
    - Rewrite from the cursor when a point is recorded mid-history
    - Bulk load points (atomic) and export them back
    """

    def __init__(
        self,
        player_a: PlayerId,
        player_b: PlayerId,
        first_server: PlayerId,
        points: Sequence[Point] = (),
        tiebreak_first_servers: Optional[Sequence[Optional[PlayerId]]] = None,
    ):
        if player_a == player_b:
            raise InvalidPlayerError("players must be distinct")

        if first_server not in (player_a, player_b):
            raise InvalidPlayerError(f"Invalid first server: {first_server}")

        self.player_a = player_a
        self.player_b = player_b
        self.first_server = first_server

        self._points: List[Point] = list(points)
        if tiebreak_first_servers is None:
            tiebreak_first_servers = self._replay_history(self._points)

        self._tiebreak_first_servers: List[Optional[PlayerId]] = list(tiebreak_first_servers)
        self._cursor = len(self._points)

    # ---------------------------------------------------------
    # Accessors
    # ---------------------------------------------------------

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    @property
    def visible_points(self) -> List[Point]:
        return self._points[:self._cursor]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def tiebreak_first_servers(self) -> List[Optional[PlayerId]]:
        return list(self._tiebreak_first_servers)

    # ---------------------------------------------------------
    # Navigation
    # ---------------------------------------------------------

    @property
    def can_back(self) -> bool:
        return self._cursor > 0

    @property
    def can_forward(self) -> bool:
        return self._cursor < len(self._points)

    def back(self):
        if self.can_back:
            self._cursor -= 1
            logger.debug("cursor back to %d", self._cursor)

    def forward(self):
        if self.can_forward:
            self._cursor += 1
            logger.debug("cursor forward to %d", self._cursor)

    def seek(self, cursor: int) -> int:
        self._cursor = max(0, min(cursor, len(self._points)))
        logger.debug("cursor moved to %d", self._cursor)
        return self._cursor

    # ---------------------------------------------------------
    # Recording
    # ---------------------------------------------------------

    def record_point(
        self,
        player: PlayerId,
        point_type: str,
        timestamp: Optional[float] = None,
    ) -> Point:
        """
        Record a point credited to `player`'s action.

        Aces and winners go to `player`; double faults and unforced
        errors go to the opponent. Anything after the cursor is
        discarded first.
        """
        self._validate_player(player)
        self._validate_point_type(point_type)

        if point_type in SERVER_POINT_TYPES:
            winner, loser = player, self._opponent(player)
        else:
            winner, loser = self._opponent(player), player

        before = self.visible_points
        previous = before[-1].timestamp if before else None

        if timestamp is None:
            timestamp = 1.0 if previous is None else previous + 1
        elif previous is not None and timestamp <= previous:
            raise TimestampOrderError("Point timestamp must be strictly increasing")

        if self.can_forward:
            self.truncate()

        point = Point(
            winner=winner,
            loser=loser,
            type=point_type,
            set_number=current_set_number(before, self.player_a, self.player_b),
            game_number=current_game_number(before, self.player_a, self.player_b),
            timestamp=timestamp,
        )

        self._points.append(point)
        self._cursor = len(self._points)

        logger.debug(
            "recorded %s for %s (set %d, game %d)",
            point_type, winner, point.set_number, point.game_number,
        )

        updated = detect_tiebreak_start(
            before,
            self._points,
            self.player_a,
            self.player_b,
            self.first_server,
            self._tiebreak_first_servers,
        )

        if len(updated) != len(self._tiebreak_first_servers):
            logger.info("tiebreak started in set %d, %s serves first", len(updated), updated[-1])

        self._tiebreak_first_servers = updated

        return point

    def truncate(self) -> List[Point]:
        """
        Discard and return every point after the cursor.

        Tiebreak openers for sets no longer reached are dropped with them;
        the entry for a tiebreak the cursor sits in is kept.
        """
        removed = self._points[self._cursor:]
        del self._points[self._cursor:]

        state = fold_points(self._points, self.player_a, self.player_b)
        keep = len(state.completed_sets) + (1 if state.in_tiebreak else 0)
        del self._tiebreak_first_servers[keep:]

        if removed:
            logger.info("discarded %d point(s) after cursor %d", len(removed), self._cursor)

        return removed

    # ---------------------------------------------------------
    # Derived values (never cached)
    # ---------------------------------------------------------

    @property
    def derived_state(self) -> DerivedMatchState:
        return compute(self.visible_points, self._points, self.player_a, self.player_b)

    @property
    def current_server(self) -> PlayerId:
        return current_server(
            self.visible_points,
            self.player_a,
            self.player_b,
            self.first_server,
            self._tiebreak_first_servers,
        )

    @property
    def current_set_number(self) -> int:
        return current_set_number(self.visible_points, self.player_a, self.player_b)

    @property
    def current_game_number(self) -> int:
        return current_game_number(self.visible_points, self.player_a, self.player_b)

    def get_timeline(self) -> List[MatchSnapshot]:
        return build_match_timeline(
            self._points,
            self.player_a,
            self.player_b,
            self.first_server,
            self._tiebreak_first_servers,
        )

    # ---------------------------------------------------------
    # Bulk load / export
    # ---------------------------------------------------------

    def load_points(
        self,
        records: List[Dict],
        tiebreak_first_servers: Optional[Sequence[Optional[PlayerId]]] = None,
    ) -> List[Point]:
        """
        Bulk load points from list of dicts.
        Atomic: if any record fails -> no state mutation.
        """
        if not isinstance(records, list):
            raise MatchValidationError("records must be a list")

        # Convert first (validation stage)
        points = []
        for r in records:
            missing = [f for f in REQUIRED_FIELDS if f not in r]
            if missing:
                raise MatchValidationError(f"Missing field(s): {missing}")

            self._validate_player(r["winner"])
            self._validate_player(r["loser"])
            if r["winner"] == r["loser"]:
                raise InvalidPlayerError("winner and loser must differ")
            self._validate_point_type(r["type"])

            points.append(
                Point(
                    winner=r["winner"],
                    loser=r["loser"],
                    type=r["type"],
                    set_number=int(r["set_number"]),
                    game_number=int(r["game_number"]),
                    timestamp=float(r["timestamp"]),
                )
            )

        points.sort(key=lambda p: p.timestamp)

        for earlier, later in zip(points, points[1:]):
            if later.timestamp <= earlier.timestamp:
                raise TimestampOrderError(f"Duplicate timestamp: {later.timestamp}")

        if tiebreak_first_servers is None:
            history = self._replay_history(points)
        else:
            history = list(tiebreak_first_servers)

        # If everything succeeds -> commit
        self._points = points
        self._tiebreak_first_servers = history
        self._cursor = len(points)

        logger.debug("loaded %d point(s)", len(points))

        return list(points)

    def export_points(self) -> List[Dict]:
        return [
            {
                "winner": p.winner,
                "loser": p.loser,
                "type": p.type,
                "set_number": p.set_number,
                "game_number": p.game_number,
                "timestamp": p.timestamp,
            }
            for p in self._points
        ]

    def reset(self):
        self._points = []
        self._tiebreak_first_servers = []
        self._cursor = 0

    # ---------------------------------------------------------
    # Validation
    # ---------------------------------------------------------

    def _validate_player(self, player: PlayerId):
        if player not in (self.player_a, self.player_b):
            raise InvalidPlayerError(f"Invalid player: {player}")

    def _validate_point_type(self, point_type: str):
        if point_type not in POINT_TYPES:
            raise InvalidPointTypeError(f"Invalid point type: {point_type}")

    def _opponent(self, player: PlayerId) -> PlayerId:
        return self.player_b if player == self.player_a else self.player_a

    def _replay_history(self, points: Sequence[Point]) -> List[Optional[PlayerId]]:
        timeline = build_match_timeline(
            points, self.player_a, self.player_b, self.first_server
        )
        return list(timeline[-1].tiebreak_first_servers) if timeline else []
