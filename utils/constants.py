"""Format constants and size limits."""

VERSION = "1.0"

HEADER_COMMENT = "# Generated by pnmdump.exe"

# Backing canvas capacity for decoded rasters
MAX_CANVAS_WIDTH = 512
MAX_CANVAS_HEIGHT = 512

# Largest scaled output
MAX_OUTPUT_WIDTH = 1920
MAX_OUTPUT_HEIGHT = 1080

# Range of synthesized border samples
EXTRAPOLATION_MIN = 0
EXTRAPOLATION_MAX = 255

DEBUG_ENV_VAR = "PNMDUMP_DEBUG"
