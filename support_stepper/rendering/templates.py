"""
Template name constants.

Pure constants - no I/O or file system knowledge.
"""


class Template:
    """Template name constants. Use these instead of raw strings."""

    STEP_CARD = "step_card"
    LOW_CONFIDENCE_WARNING = "low_confidence_warning"
    SKIPPED_STEPS_BANNER = "skipped_steps_banner"
    FALLBACK_NOTICE = "fallback_notice"
    COMPLETION_SUMMARY = "completion_summary"
