"""
SessionGate Theme - Centralized color palette.

Dark background, indigo for the sign-in action, red for sign-out and errors,
green for the signed-in confirmation.
"""

# =============================================================================
# PRIMARY ACCENT COLORS
# =============================================================================
INDIGO_PRIMARY = "#4F46E5"     # Sign-in action, spinner
INDIGO_LIGHT = "#818CF8"       # Username highlight
RED_PRIMARY = "#DC2626"        # Sign-out action
RED_LIGHT = "#F87171"          # Signed-out notice, errors
GREEN_LIGHT = "#4ADE80"        # Signed-in confirmation
PURPLE_LIGHT = "#C084FC"       # Title

# =============================================================================
# TEXT COLORS
# =============================================================================
TEXT_BRIGHT = "#FFFFFF"
TEXT_BODY = "#D1D5DB"
TEXT_MUTED = "#9CA3AF"

# =============================================================================
# BACKGROUNDS
# =============================================================================
BG_PAGE = "#111827"
BG_CARD = "#1F2937"

# =============================================================================
# LOG LEVEL COLORS
# =============================================================================
LOG_INFO = INDIGO_LIGHT
LOG_SUCCESS = GREEN_LIGHT
LOG_WARNING = "#FBBF24"
LOG_ERROR = RED_LIGHT


def get_log_color(level: str) -> str:
    """Get the color for a log level."""
    return {
        "info": LOG_INFO,
        "success": LOG_SUCCESS,
        "warning": LOG_WARNING,
        "error": LOG_ERROR,
    }.get(level.lower(), TEXT_MUTED)
