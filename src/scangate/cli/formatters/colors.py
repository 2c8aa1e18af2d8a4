"""ANSI color templates for console messages"""

INFO_COLOR = "\033[1;34m%s\033[0m"
NOTICE_COLOR = "\033[1;36m%s\033[0m"
WARNING_COLOR = "\033[1;33m%s\033[0m"
ERROR_COLOR = "\033[1;31m%s\033[0m"
DEBUG_COLOR = "\033[0;36m%s\033[0m"

SEVERITY_COLORS = {
    "Critical": ERROR_COLOR,
    "High": ERROR_COLOR,
    "Medium": WARNING_COLOR,
    "Low": NOTICE_COLOR,
    "Negligible": DEBUG_COLOR,
    "Unknown": DEBUG_COLOR,
}


def colorize(template: str, text: str, enabled: bool = True) -> str:
    if not enabled:
        return text
    return template % text
