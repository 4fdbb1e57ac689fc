# breaker/constants.py

APP_TITLE = "Brick Breaker"

WHITE = (245, 245, 245)
BLACK = (0, 0, 0)
GRAY = (120, 120, 120)
DARK_GRAY = (64, 64, 64)
RED = (240, 80, 80)
OVERLAY = (25, 25, 25, 200)

# blocks
COMMON_COLOR = (255, 223, 0)
STICKY_COLOR = (50, 205, 50)
RESISTANT_COLOR = (200, 42, 42)
BLOCK_REROLL_ODDS = 4            # 1 in N cells gets a random category
BLOCK_POINTS_STEP = 30

# paddle
PADDLE_WIDTH = 70
PADDLE_HEIGHT = 10
PADDLE_SPEED = 15
PADDLE_LIVES = 3
PADDLE_WIDEN_STEP = 10
PADDLE_QUICKEN_STEP = 5

# ball
BALL_SIZE = 15
BALL_BASE_SPEED = 15
BALL_SPEED_CAP = 30
BALL_PADDLE_BOOST = 3
BALL_ENLARGE_STEP = 5
BALL_COLOR_PERIOD_MS = 100
TEMP_BALL_COLOR = (150, 20, 20)
TEMP_BALL_SPEED = BALL_BASE_SPEED - 5
TEMP_BALL_ACTIVE_MS = 3000
TEMP_BALL_COOLDOWN_MS = 5000

# combo
COMBO_RESET_MS = 1000
COMBO_BONUS_STEP = 5
COMBO_RAINBOW_THRESHOLD = 5
RAINBOW = [
    (255, 0, 0),
    (255, 174, 66),
    (255, 240, 0),
    (204, 255, 0),
    (125, 249, 255),
    (42, 82, 190),
    (150, 0, 130),
]

# power-ups
POWERUP_SIZE = 10
POWERUP_SPAWN_ODDS = 9           # 1 in N destroyed blocks
POWERUP_FALL_STEP = 10
POWERUP_FALL_MS = 3000
POWERUP_DOCKED_MS = 5000
POWERUP_BLINK_MS = 500

# floating score text
FLOATING_TEXT_MS = 1000
FLOATING_TEXT_DRIFT = 1

# upgrades
UPGRADE_WINDOW = 1000
UPGRADE_KEY_DELAY_MS = 200

GAME_OVER_DELAY_MS = 2000
