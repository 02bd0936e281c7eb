from typing import List, Sequence

from scoreboard.config import (
    GAME_POINTS_TO_WIN,
    GAMES_PER_SET,
    TIEBREAK_POINTS_TO_WIN,
    TIEBREAK_SET_SCORE,
    WIN_MARGIN,
)
from scoreboard.models import MatchState, PlayerId, Point, Tally


class ScoreEngine:
    """
    Point-by-point accumulator for one fold.

    Responsibilities:
    - Count points into games, games into sets
    - Enter and resolve tiebreaks at 6-6
    - Produce an immutable MatchState

    An instance lives for a single fold; fold_points() builds a fresh one
    on every call so no state survives between calls.
    """

    def __init__(self, player_a: PlayerId, player_b: PlayerId):
        self.player_a = player_a
        self.player_b = player_b

        self.completed_sets: List[Tally] = []
        self.set_a = 0
        self.set_b = 0
        self.game_a = 0
        self.game_b = 0
        self.in_tiebreak = False

    # =========================================================
    # PUBLIC API
    # =========================================================

    def add_point(self, winner: PlayerId) -> None:
        if winner == self.player_a:
            self.game_a += 1
        else:
            self.game_b += 1

        if self._is_game_won():
            self._finalize_game()

    def snapshot(self) -> MatchState:
        return MatchState(
            completed_sets=tuple(self.completed_sets),
            current_set_games=(self.set_a, self.set_b),
            current_game_score=(self.game_a, self.game_b),
            in_tiebreak=self.in_tiebreak,
        )

    # =========================================================
    # GAME LOGIC
    # =========================================================

    def _is_game_won(self) -> bool:
        target = TIEBREAK_POINTS_TO_WIN if self.in_tiebreak else GAME_POINTS_TO_WIN
        a = self.game_a
        b = self.game_b

        return (a >= target or b >= target) and abs(a - b) >= WIN_MARGIN

    def _finalize_game(self):
        a_won = self.game_a > self.game_b
        self.game_a = 0
        self.game_b = 0

        if self.in_tiebreak:
            high, low = TIEBREAK_SET_SCORE
            self.completed_sets.append((high, low) if a_won else (low, high))
            self.set_a = 0
            self.set_b = 0
            self.in_tiebreak = False
            return

        if a_won:
            self.set_a += 1
        else:
            self.set_b += 1

        self._check_set()

    # =========================================================
    # SET LOGIC
    # =========================================================

    def _check_set(self):
        a = self.set_a
        b = self.set_b

        if a == GAMES_PER_SET and b == GAMES_PER_SET:
            # Set is appended only when the tiebreak concludes
            self.in_tiebreak = True
        elif (a >= GAMES_PER_SET or b >= GAMES_PER_SET) and abs(a - b) >= WIN_MARGIN:
            self.completed_sets.append((a, b))
            self.set_a = 0
            self.set_b = 0


def fold_points(points: Sequence[Point], player_a: PlayerId, player_b: PlayerId) -> MatchState:
    """
    Reduce an ordered point list into raw match counts.
    Pure: the same prefix always folds to the same state.
    """
    engine = ScoreEngine(player_a, player_b)

    for point in points:
        engine.add_point(point.winner)

    return engine.snapshot()


def current_set_number(points: Sequence[Point], player_a: PlayerId, player_b: PlayerId) -> int:
    state = fold_points(points, player_a, player_b)
    return len(state.completed_sets) + 1


def current_game_number(points: Sequence[Point], player_a: PlayerId, player_b: PlayerId) -> int:
    # A tiebreak set is stored 7-6, i.e. 12 games plus the tiebreak as one game
    state = fold_points(points, player_a, player_b)
    return state.total_games_played + 1
