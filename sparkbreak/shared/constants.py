# sparkbreak/shared/constants.py

APP_TITLE = "Spark Break"
WIDTH, HEIGHT = 600, 800
FPS = 60

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GRAY = (150, 150, 170)
FIELD = (26, 26, 78)        # play area above the collection line
TRAY = (42, 42, 94)         # collection area
CYAN = (0, 255, 255)
YELLOW = (255, 255, 0)
ORANGE = (255, 153, 0)
RED = (255, 0, 0)
WALL_BLUE = (26, 26, 94)
GREEN = (60, 200, 120)
