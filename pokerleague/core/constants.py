"""Global constants for the pokerleague application."""

# Collection names
GROUPS_COLLECTION = "groups"
GAMES_COLLECTION = "games"
USERS_COLLECTION = "users"

# Game status values
GAME_STATUS_SCHEDULED = "scheduled"
GAME_STATUS_COMPLETED = "completed"

# Game types
GAME_TYPE_TOURNAMENT = "tournament"
GAME_TYPE_CASH = "cash"
GAME_TYPES = (GAME_TYPE_TOURNAMENT, GAME_TYPE_CASH)

# Money
DEFAULT_BUYIN = 20
SIDE_BET_COST = 5

# Best hand side bet, as stored in the newer sideBets list format
BEST_HAND_SIDE_BET_ID = "legacy-best-hand"
BEST_HAND_SIDE_BET_NAME = "best hand"

# Points
TIE_SPLIT_POSITION = "position"
TIE_SPLIT_BLOCK = "block"
TIE_SPLIT_MODES = (TIE_SPLIT_POSITION, TIE_SPLIT_BLOCK)

# Ranking
RANK_EPSILON = 0.001

# Streaks
STREAK_WIN = "win"
STREAK_LOSS = "loss"

# Sorting
SORT_ASC = "asc"
SORT_DESC = "desc"
SORT_DIRECTIONS = (SORT_ASC, SORT_DESC)
DEFAULT_SORT_FIELD = "points"
DEFAULT_SORT_DIRECTION = SORT_DESC

# Player labels
UNKNOWN_PLAYER_NAME = "Unknown"
UNKNOWN_GROUP_NAME = "Unknown Group"
PLACEHOLDER_ID_SUFFIX_LENGTH = 8
