"""Central configuration defaults for region detection.

All tunable parameters are defined here with descriptive names. They are the
defaults for `settings.Settings`, which may override them from a YAML file or
the environment at startup. Core functions take their thresholds as
arguments and never read this module's state at call time.
"""

# =============================================================================
# FRAME QUEUE
# =============================================================================

# Maximum number of frames waiting for processing. When full, the oldest
# pending frame is dropped to make room for the newest one.
FRAME_QUEUE_SIZE = 30

# =============================================================================
# PERSON DETECTION
# =============================================================================

# Bounding box area range (pixels) for person candidates
MIN_PERSON_AREA = 5000
MAX_PERSON_AREA = 50000

# Aspect ratio range (width/height); people are tall and narrow
MIN_PERSON_ASPECT_RATIO = 0.25
MAX_PERSON_ASPECT_RATIO = 0.7

# Binarization before person detection
PERSON_BLUR_SIGMA = 1.5
PERSON_THRESHOLD = 140

# =============================================================================
# VEHICLE DETECTION
# =============================================================================

# Bounding box area range (pixels) for vehicle candidates
MIN_VEHICLE_AREA = 5000
MAX_VEHICLE_AREA = 120000

# Aspect ratio range (width/height); vehicles are roughly square to wide
MIN_VEHICLE_ASPECT_RATIO = 0.5
MAX_VEHICLE_ASPECT_RATIO = 2.5

# Binarization before vehicle detection
VEHICLE_BLUR_SIGMA = 2.0
VEHICLE_THRESHOLD = 128

# =============================================================================
# DEDUPLICATION
# =============================================================================

# Two regions overlap when intersection / smaller area exceeds this ratio.
# Every region that overlaps any other region is dropped.
OVERLAP_THRESHOLD = 0.5

# =============================================================================
# LICENSE PLATE OCR
# =============================================================================

# Languages loaded into the OCR reader
OCR_LANGUAGES = ("en",)

# Plate text length after normalization (A-Z, 0-9 only)
MIN_PLATE_LENGTH = 5
MAX_PLATE_LENGTH = 8

# Accepted plate formats
PLATE_PATTERNS = {
    "UK": r"^[A-Z]{2}[0-9]{2}[A-Z]{3}$",
    "US": r"^[A-Z0-9]{5,8}$",
    "EU": r"^[A-Z]{1,2}[0-9]{1,4}[A-Z]{1,2}$",
}

# =============================================================================
# DEBUG OUTPUT
# =============================================================================

# Save annotated frames for every frame with detections
DEBUG_MODE = False
DEBUG_DIR = "debug_output"

# Rectangle colors (BGR) for debug images
PERSON_BOX_COLOR = (0, 255, 0)
VEHICLE_BOX_COLOR = (0, 0, 255)
