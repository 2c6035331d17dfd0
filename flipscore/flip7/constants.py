"""Flip 7 scoreboard constants."""

# Score at which a player is marked as a winner and counted at rematch
WIN_THRESHOLD = 200

# Added to the entered points when a player flips seven distinct cards
FLIP_BONUS = 15

MAX_PLAYERS = 12

# Number of undoable snapshots kept in memory
HISTORY_DEPTH = 5

# Persistence slot key, shared with the browser version of the scoreboard
STORAGE_KEY = "flip7_v3_state"

WAITING_FOR_PLAYERS = "Waiting for players..."
