from dataclasses import dataclass
from typing import Hashable, Literal, Optional, Tuple


PlayerId = Hashable
PointType = Literal["ace", "winner", "double_fault", "unforced_error"]
Tally = Tuple[int, int]


@dataclass(frozen=True)
class Point:
    winner: PlayerId
    loser: PlayerId
    type: PointType
    set_number: int
    game_number: int
    timestamp: float


@dataclass(frozen=True)
class MatchState:
    """
    Raw counts produced by folding an ordered point list.

    All tallies are (player_a, player_b).
    """
    completed_sets: Tuple[Tally, ...] = ()
    current_set_games: Tally = (0, 0)
    current_game_score: Tally = (0, 0)
    in_tiebreak: bool = False

    @property
    def total_games_played(self) -> int:
        completed = sum(a + b for a, b in self.completed_sets)
        return completed + self.current_set_games[0] + self.current_set_games[1]


@dataclass(frozen=True)
class DerivedMatchState:
    set_scores: Tuple[Tally, ...]
    current_set_games: Tally
    in_game_display: Tuple[str, str]
    leader_id: Optional[PlayerId]
    trailer_id: Optional[PlayerId]
    current_score_string: str
    end_score_string: str
    sets_and_games_only: str
    in_tiebreak: bool


@dataclass(frozen=True)
class MatchSnapshot:
    point_index: int
    timestamp: float
    server: PlayerId
    tiebreak_first_servers: Tuple[Optional[PlayerId], ...]
    state: DerivedMatchState


@dataclass(frozen=True)
class PointCounts:
    aces: int = 0
    winners: int = 0
    double_faults: int = 0
    unforced_errors: int = 0

    @property
    def total(self) -> int:
        return self.aces + self.winners + self.double_faults + self.unforced_errors
