"""
Structured error codes for layout and per-word failures.
Use these keys in summaries and logs; map to user-facing messages in the UI.
"""

# Known error keys (returned e.g. in LayoutSummary.warnings)
EMPTY_WORDS = "empty_words"
INVALID_STYLE = "invalid_style"
MASK_LOAD_FAILED = "mask_load_failed"
MEASURE_FAILED = "measure_failed"
NO_FIT = "no_fit"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    EMPTY_WORDS: "No words to place. Add at least one word with a weight.",
    INVALID_STYLE: "Canvas, grid or font size settings are invalid. Check sizes are positive and min <= max.",
    MASK_LOAD_FAILED: "Mask could not be loaded; the whole canvas was used instead.",
    MEASURE_FAILED: "A word could not be measured and was skipped.",
    NO_FIT: "Some words did not fit. Try a larger canvas, smaller fonts or enable shrink-to-fit.",
}


class GlyphMeasureError(RuntimeError):
    """Raised when a word cannot be turned into a usable glyph footprint."""


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
