# recipe_box/services/ids.py
import re
from typing import Optional

_YT_URL_RE = re.compile(r"^(https?://)?(www\.)?(youtube\.com|youtu\.be)/.+$")

# Tried in order: `v=` or a path segment, then the bare id.
_YT_ID_PATTERNS = (
    re.compile(r"(?:v=|/)([A-Za-z0-9_-]{11})"),
    re.compile(r"^([A-Za-z0-9_-]{11})$"),
)


def is_youtube_url(url: str) -> bool:
    return bool(_YT_URL_RE.match(url))


def extract_video_id(url: str) -> Optional[str]:
    """Return the 11-character video id, or None."""
    for pattern in _YT_ID_PATTERNS:
        m = pattern.search(url)
        if m:
            return m.group(1)
    return None
