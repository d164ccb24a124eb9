# ============================================================
# GRID
# ============================================================
GRID_ROWS = 60          # y: 0-59, top to bottom
GRID_COLS = 120         # x: 0-119, left to right

# Two-cell-wide main roads
MAIN_ROAD_WIDTH = 2
MAIN_ROW_START  = 8     # horizontal bands at rows 8, 20, 32, ...
MAIN_ROW_STEP   = 12
MAIN_COL_START  = 8     # vertical bands at cols 8, 24, 40, ...
MAIN_COL_STEP   = 16

# Single-cell connectors
LINK_ROW_START  = 4     # rows 4, 28, 52
LINK_ROW_STEP   = 24
LINK_COL_START  = 4     # cols 4, 36, 68, 100
LINK_COL_STEP   = 32

# ============================================================
# TRAFFIC
# ============================================================
CAR_COUNT_RANGE    = (50, 75)   # inclusive
SPAWN_ATTEMPTS     = 10         # draws per car before the slot is skipped
MIN_SPEED          = 0.2        # cells per tick
SPEED_SPREAD       = 0.5        # speed is drawn from [0.2, 0.7)
COLLISION_DISTANCE = 0.8        # per-axis distance that counts as a collision
STUCK_LIMIT        = 20         # ticks blocked before escalating
TURN_PROBABILITY   = 0.001      # random turn while moving freely

# ============================================================
# SCHEDULING
# ============================================================
RECOMPUTE_INTERVAL = 1000       # ms between periodic path recalculations
FPS = 60
FRAME_MS = 1000.0 / FPS

# ============================================================
# PRESENTATION  (RGB)
# ============================================================
CELL_SIZE     = 8
MAP_WIDTH     = GRID_COLS * CELL_SIZE   # 960 px
MAP_HEIGHT    = GRID_ROWS * CELL_SIZE   # 480 px
PANEL_WIDTH   = 260
WINDOW_WIDTH  = MAP_WIDTH + PANEL_WIDTH
WINDOW_HEIGHT = MAP_HEIGHT

WALL_COLOR     = (44, 62, 80)
ROAD_COLOR     = (189, 195, 199)
GRID_LINE      = (149, 165, 166)
PATH_COLOR     = (232, 193, 255)
VISITED_COLOR  = (174, 214, 241)
START_COLOR    = (39, 174, 96)
END_COLOR      = (231, 76, 60)
HEADING_COLOR  = (255, 255, 255)

PANEL_BG         = (30, 30, 40)
PANEL_TEXT       = (200, 200, 210)
PANEL_HEADER     = (140, 160, 255)
PANEL_SEPARATOR  = (60, 60, 80)
PANEL_GREEN      = (80, 220, 100)
PANEL_RED        = (230, 70, 70)

CAR_COLORS = [
    (255, 107, 107), (78, 205, 196), (69, 183, 209), (150, 206, 180),
    (255, 234, 167), (221, 160, 221), (255, 159, 67), (106, 176, 76),
    (235, 77, 75), (127, 140, 141), (224, 86, 253), (104, 109, 224),
    (48, 51, 107), (149, 165, 166), (241, 196, 15),
]
