import re
from typing import Optional

MOBILE = "mobile"
DESKTOP = "desktop"

_MOBILE_PATTERN = re.compile(r"mobile|android|iphone|ipad|ipod", re.IGNORECASE)


def detect_device_type(user_agent: Optional[str]) -> str:
    """Classify a User-Agent header as "mobile" or "desktop"."""
    if user_agent and _MOBILE_PATTERN.search(user_agent):
        return MOBILE
    return DESKTOP
