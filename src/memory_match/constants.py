DEFAULT_COLUMNS = 4
MIN_COLUMNS = 2
STARTING_TRIES = 10

# Delay before a mismatched pair is turned face-down again.
FLIP_BACK_DELAY_MS = 500
# After a loss the successor board is shown disabled for this long (presentation only).
LOSS_LOCKOUT_MS = 1000
# Lifetime of a non-blocking notice (save/load result, win/loss message).
NOTICE_DURATION_MS = 2000

DEFAULT_SAVE_FILE = "game_save.txt"

# Ordered asset catalog. The final entry is reserved for the unpaired tile of odd boards.
DEFAULT_IMAGES = (
    "0.png",
    "1.png",
    "2.png",
    "3.png",
    "4.png",
    "5.png",
    "6.png",
    "7.png",
    "8.png",
)

WINDOW_TITLE = "Memory Match Game"
TILE_SIZE = 120
TILE_PADDING = 4
HEADER_HEIGHT = 60
FOOTER_HEIGHT = 40
