"""
Central configuration for fullcard.

Keep runtime-safe (no secrets).
"""

# UI
MAX_INDIVIDUAL_DOWNLOADS = 10  # <= this: individual PDF downloads; > this: ZIP download
ZIP_SPOOL_MAX_BYTES = 25 * 1024 * 1024  # spill ZIP to disk after ~25MB

# Fonts
FONT = "DejaVuSans"
FONT_FALLBACK = "Helvetica"
FONT_SIZE = 10
FULLCARD_FONT = FONT_SIZE - 2

# Membership status codes, as defined by Galette
STATUS_ACTIVE_MEMBER = 4
STATUS_BENEFACTOR_MEMBER = 5

# Header logo box (mm)
LOGO_MAX_WIDTH = 40.0
LOGO_MAX_HEIGHT = 20.0
