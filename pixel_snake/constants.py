"""Game constants."""

GRID_ROWS, GRID_COLS = 40, 40
START_ROW, START_COL = 20, 1
START_LENGTH = 3
START_DIRECTION = "right"
FOOD_POINTS = 10
FOOD_PLACEMENT_ATTEMPTS = 100

# (d_row, d_col)
DIRECTIONS = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}
OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}
