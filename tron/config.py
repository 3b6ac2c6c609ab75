BOARD_HEIGHT = 10
BOARD_WIDTH = 10

DIRS = [(-1, 0), (0, 1), (1, 0), (0, -1)]  # up, right, down, left
# bomb blast: 8 neighbours, centre excluded
BLAST = [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]

# search defaults
TURN_TIME_MS = 1000
MIN_SCORE = -2 ** 31
MAX_SCORE = 2 ** 31 - 1

# zone-control value of a claimed cell
EMPTY_VALUE = 1
SPEED_VALUE = 3
ARMOR_VALUE = 4
BOMB_VALUE = 5
OCCUPIED_VALUE = 0

# arena / match
MAX_TURNS = 400  # safety cap
DEFAULT_ITEMS = 8
BOOST_DURATION = 3
