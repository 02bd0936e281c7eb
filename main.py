from scoreboard.match_session import MatchSession
from scoreboard.progression import current_game_progression
from scoreboard.stats import match_summary, set_summary

session = MatchSession(
    player_a="player_a",
    player_b="player_b",
    first_server="player_a",
)
NAMES = {"player_a": "Ann", "player_b": "Bob"}


def hold(player):
    for _ in range(4):
        session.record_point(player, "winner")


# Set 1: 6-6 -> tiebreak
for _ in range(6):
    hold("player_a")
    hold("player_b")

print("Tiebreak:", session.derived_state.current_score_string)
print("Tiebreak first server:", session.tiebreak_first_servers[0])

# Tiebreak: 5-5 then player_b takes it 7-5
for _ in range(5):
    session.record_point("player_a", "ace")
    session.record_point("player_b", "ace")

session.record_point("player_a", "unforced_error")
session.record_point("player_b", "winner")

state = session.derived_state
print("After tiebreak:", state.current_score_string)
print("Set scores:", state.set_scores)
print("Serving set 2:", session.current_server)
print("Tiebreak story:", current_game_progression(session.points, "player_a", "player_b", NAMES))

# Rewind two points and rewrite the ending
session.back()
session.back()
print("\nRewound:", session.derived_state.current_score_string)
print("Match end score still:", session.derived_state.end_score_string)

session.record_point("player_a", "winner")
print("Rewritten:", session.derived_state.current_score_string)
print("Points kept:", len(session.points))

winner, score = set_summary(session.points, 1, "player_a", "player_b", NAMES)
print("Set 1:", f"{NAMES[winner]} wins {score}" if winner else score)
print("Match:", match_summary(session.points, "player_a", "player_b"))
