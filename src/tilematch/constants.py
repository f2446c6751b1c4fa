GRID_ROWS = 8
GRID_COLS = 8

# Minimum run length that counts as a match.
MATCH_MIN_LENGTH = 3
# Points per cleared tile before the size multiplier.
POINTS_PER_TILE = 10

# Per-level pacing. Target for level n is BASE_TARGET + (n - 1) * TARGET_STEP.
BASE_MOVES = 30
BASE_TARGET = 1000
TARGET_STEP = 500

# Power-up inventory handed out on a fresh game (keyed by PowerUpKind value).
STARTING_POWER_UPS = {
    'bomb': 3,
    'rainbow': 2,
    'shuffle': 1,
}
# Level multiples that grant the larger power-ups on level completion.
RAINBOW_BONUS_EVERY = 3
SHUFFLE_BONUS_EVERY = 5

# Redraw bound per cell before board generation falls back to a filtered pick.
GENERATION_MAX_ATTEMPTS = 100
# Refill with a single type re-matches forever.
MIN_SPAWNABLE_TYPES = 2

# Slide-merge (2048) board.
SLIDE_SIZE = 4
SLIDE_GOAL = 2048
SLIDE_FOUR_CHANCE = 0.1
