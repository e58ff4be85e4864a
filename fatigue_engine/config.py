"""
Configuration file for all fatigue engine thresholds and settings
"""

import os

from dotenv import load_dotenv

load_dotenv()  # Load .env file if it exists

# Eye Aspect Ratio (EAR) thresholds
EAR_CLOSED_THRESHOLD = 0.15           # EAR < 0.15 => closed
EAR_DROWSY_THRESHOLD = 0.20           # 0.15 <= EAR < 0.20 => drowsy
EAR_DEFAULT_OPEN = 0.25               # Used when eye landmarks are missing

# Blink detection
BLINK_DEBOUNCE_SECONDS = 0.30         # Minimum gap between two counted blinks
BLINK_RATE_WINDOW = 60                # seconds

# Mouth Aspect Ratio (MAR) yawn detection
MAR_YAWN_THRESHOLD = 0.07             # Smoothed MAR > threshold => yawning
MAR_SMOOTHING_WINDOW = 10             # Number of frames averaged

# Head pose thresholds (fractions of face width / height)
HEAD_HORIZONTAL_THRESHOLD = 0.08
HEAD_VERTICAL_THRESHOLD = 0.15
HEAD_NOSE_DROP_RATIO = 0.10           # Nose sits naturally below eye level

# Drowsiness score
EAR_SMOOTHING_WINDOW = 20
SCORE_SMOOTHING_WINDOW = 15
SCORE_WEIGHT_BASE = 1.2               # Weight of i-th oldest sample = 1.2 ** i
SCORE_MIN = 0.0
SCORE_MAX = 100.0

# Eye closure term: (smoothed EAR upper bound, points)
EYE_CLOSURE_POINTS = (
    (0.15, 40),
    (0.20, 25),
    (0.22, 10),
)

# Blink rate term (blinks per minute)
BLINK_RATE_HIGH = 35                  # > 35 => +25
BLINK_RATE_LOW = 5                    # < 5 => +15
BLINK_RATE_ELEVATED = 30              # 30 < rate <= 35 => +10
BLINK_RATE_REDUCED = 8                # 5 <= rate < 8 => +10
BLINK_RATE_HIGH_POINTS = 25
BLINK_RATE_LOW_POINTS = 15
BLINK_RATE_MODERATE_POINTS = 10

YAWN_POINTS = 20

# Fatigue duration term: (minutes lower bound, points), checked in order
FATIGUE_DURATION_POINTS = (
    (120, 15),
    (60, 10),
    (30, 5),
)

# Alert levels
ALERT_CRITICAL_SCORE = 65
ALERT_CRITICAL_CLOSED_SCORE = 50      # Eyes closed AND score >= 50 => critical
ALERT_WARNING_SCORE = 35

# Audio cue minimum re-trigger intervals (seconds)
CUE_CRITICAL_INTERVAL_SECONDS = 2.0
CUE_WARNING_INTERVAL_SECONDS = 4.0
CUE_YAWN_INTERVAL_SECONDS = 3.0
CUE_EYES_CLOSED_INTERVAL_SECONDS = 1.5

# Persistence: alert events are derived above this score
ALERT_EVENT_SCORE_THRESHOLD = 70

# Landmark source (MediaPipe Face Mesh)
MAX_NUM_FACES = 1
MIN_DETECTION_CONFIDENCE = 0.5
MIN_TRACKING_CONFIDENCE = 0.5

# Camera settings
CAMERA_INDEX = int(os.getenv("CAMERA_INDEX", "0"))
FRAME_WIDTH = 1280
FRAME_HEIGHT = 720
TARGET_FPS = 30

# Camera backend (mainly for Windows reliability)
# Options: "AUTO", "DSHOW", "MSMF"
CAMERA_BACKEND = os.getenv("CAMERA_BACKEND", "AUTO")

# How many camera indices to probe if CAMERA_INDEX fails (0..N-1)
CAMERA_PROBE_COUNT = 4

# Frame read recovery
CAMERA_WARMUP_FRAMES = 10
CAMERA_SILENT_RETRIES = 5         # failures retried without a warning
CAMERA_REOPEN_AFTER = 20          # failures before the device is re-opened
CAMERA_WARNING_INTERVAL = 5.0     # seconds between glitch warnings

# Logging
LOG_LEVEL = os.getenv("FATIGUE_LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("FATIGUE_LOG_DIR")  # None => console only

# Supabase Cloud Integration Configuration
# Set these via environment variables: SUPABASE_URL and SUPABASE_KEY
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
SUPABASE_ENABLED = os.getenv("SUPABASE_ENABLED", "true").lower() == "true"
SUPABASE_SNAPSHOT_INTERVAL_SECONDS = 0  # 0 => log every frame
DRIVER_ID = os.getenv("DRIVER_ID", "DRV-001")

# Runner settings
WINDOW_TITLE = "Driver Fatigue Monitor"
DRAW_KEY_POINTS = True
STATUS_PRINT_EVERY_FRAMES = 30
