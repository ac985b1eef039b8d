"""Board geometry and engine defaults.

The 10x9 Xiangqi board is stored inside a 14x13 grid: two extra rows/columns
on every side are filled with the OUT sentinel so that move generation can
look at neighbouring cells without bounds checks.
"""

BOARD_ROWS = 14
BOARD_COLS = 13
PLAY_ROWS = 10
PLAY_COLS = 9
ROW_BEGIN = 2
COL_BEGIN = 2
ROW_END = ROW_BEGIN + PLAY_ROWS  # exclusive
COL_END = COL_BEGIN + PLAY_COLS  # exclusive

# A pawn past these rows has crossed the river and may also step sideways.
RIVER_UP = ROW_BEGIN + 4
RIVER_DOWN = ROW_BEGIN + 5

# Palace (3x3) bounds, inclusive.
PALACE_UP_TOP = ROW_BEGIN
PALACE_UP_BOTTOM = ROW_BEGIN + 2
PALACE_UP_LEFT = COL_BEGIN + 3
PALACE_UP_RIGHT = COL_BEGIN + 5

PALACE_DOWN_TOP = ROW_BEGIN + 7
PALACE_DOWN_BOTTOM = ROW_BEGIN + 9
PALACE_DOWN_LEFT = COL_BEGIN + 3
PALACE_DOWN_RIGHT = COL_BEGIN + 5

# Search depth (difficulty). Depth d searches d + 1 plies.
DEFAULT_SEARCH_DEPTH = 2
MIN_SEARCH_DEPTH = 1
MAX_SEARCH_DEPTH = 3

# Alpha-beta window sentinels (int32 range).
SCORE_MIN = -(2 ** 31)
SCORE_MAX = 2 ** 31 - 1
