# Application settings

# --- Classification Thresholds ---
# Center pixel must be below this on every channel to count as near-black
NEAR_BLACK_MAX = 10
# Center pixel must be above this on every channel to count as near-white
NEAR_WHITE_MIN = 245
# Delta thresholds are round(-255 / DEAD_DELTA_DIVISOR) and round(255 / HOT_DELTA_DIVISOR).
# Dead deltas are allowed to be much smaller in magnitude than hot ones.
DEAD_DELTA_DIVISOR = 4.75
HOT_DELTA_DIVISOR = 1.75

DETECTION_DEFAULTS = {
    "near_black_max": NEAR_BLACK_MAX,
    "near_white_min": NEAR_WHITE_MIN,
    "dead_divisor": DEAD_DELTA_DIVISOR,
    "hot_divisor": HOT_DELTA_DIVISOR,
}

# --- Synthetic Defect Injection ---
HOT_VALUE = 255 # Written to all three channels
DEAD_VALUE = 0

INJECTION_DEFAULTS = {
    "hot_count": 100,
    "dead_count": 100,
    "seed": 42,
}

# --- Parallel Detection ---
PARALLEL_DEFAULTS = {
    "band_rows": 256, # Interior rows handled by one worker task
    "max_workers": None, # None lets concurrent.futures pick
}

# --- I/O Defaults ---
IO_DEFAULTS = {
    "jpeg_quality": 95,
    "png_compression": 6,
    "snapshot_suffix": "_injected",
}

# --- Logging ---
LOGGING_LEVEL = "INFO" # Options: DEBUG, INFO, WARNING, ERROR
