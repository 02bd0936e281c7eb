# Game / set thresholds
GAME_POINTS_TO_WIN = 4
TIEBREAK_POINTS_TO_WIN = 7
WIN_MARGIN = 2
GAMES_PER_SET = 6

# A set decided by tiebreak is always recorded 7-6
TIEBREAK_SET_SCORE = (GAMES_PER_SET + 1, GAMES_PER_SET)

# Display
POINT_LABELS = ("0", "15", "30", "40")
DEUCE_LABEL = "Deuce"
ADVANTAGE_LABEL = "Ad"
EMPTY_SCORE = "0-0"

# Point types
POINT_TYPES = ("ace", "winner", "double_fault", "unforced_error")
SERVER_POINT_TYPES = ("ace", "winner")          # named player wins the point
ERROR_POINT_TYPES = ("double_fault", "unforced_error")  # named player loses it

# Game progression
PROGRESSION_SEPARATOR = " → "
GAME_WON_TEMPLATE = "Game to {}"
