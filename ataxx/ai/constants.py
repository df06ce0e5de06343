# Ataxx Game Constants
SIDE = 7
# Playable side plus a two-deep ring of blocked squares on every edge
BORDER = 2
EXTENDED_SIDE = SIDE + 2 * BORDER
BOARD_TOTAL_CELLS = SIDE * SIDE
EXTENDED_TOTAL_CELLS = EXTENDED_SIDE * EXTENDED_SIDE

# Consecutive jumps without an extend that end the game
JUMP_LIMIT = 25

COLUMNS = "abcdefg"
ROWS = "1234567"

# Default agent parameters
DEFAULT_MINIMAX_DEPTH = 4
# More open squares than this and the search stays one ply deep
OPEN_CELLS_SEARCH_LIMIT = 5

# A position value meaning the side to move has won
WINNING_VALUE = 10_000
INFTY = WINNING_VALUE + 1


def index(col, row):
    """Return the linearized index of the 0-based square COL, ROW."""
    return (row + BORDER) * EXTENDED_SIDE + (col + BORDER)


def neighbor(sq, dc, dr):
    """Return the index DC columns and DR rows away from SQ."""
    return sq + dc + dr * EXTENDED_SIDE


EXTEND_OFFSETS = tuple(
    neighbor(0, dc, dr)
    for dr in (-1, 0, 1)
    for dc in (-1, 0, 1)
    if (dr, dc) != (0, 0)
)

JUMP_OFFSETS = tuple(
    neighbor(0, dc, dr)
    for dr in range(-2, 3)
    for dc in range(-2, 3)
    if max(abs(dr), abs(dc)) == 2
)

ALL_OFFSETS = EXTEND_OFFSETS + JUMP_OFFSETS

# Interior squares in row-major order, a1 first
SQUARES = tuple(index(col, row) for row in range(SIDE) for col in range(SIDE))
