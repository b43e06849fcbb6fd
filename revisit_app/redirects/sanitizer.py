from __future__ import annotations

from typing import Iterable, Optional
from urllib.parse import urlsplit


def sanitize_redirect_url(
    rendered: Optional[str], allowed_schemes: Optional[Iterable[str]] = None
) -> Optional[str]:
    """Return the trimmed URL, or None when it must not be used as a redirect.

    Empty strings and ``javascript:`` URLs are always rejected. This is a
    blocklist, not URL validation. Passing ``allowed_schemes`` additionally
    rejects absolute URLs with any other scheme; relative URLs still pass.
    """
    trimmed = (rendered or "").strip()
    if not trimmed:
        return None
    if trimmed.lower().startswith("javascript:"):
        return None
    if allowed_schemes:
        try:
            scheme = urlsplit(trimmed).scheme.lower()
        except ValueError:
            return None
        if scheme and scheme not in {s.lower() for s in allowed_schemes}:
            return None
    return trimmed
