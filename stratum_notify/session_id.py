from __future__ import annotations

import re
from typing import Any

SESSION_ID_HEX_LENGTH = 8

_SESSION_ID_RE = re.compile(r"[0-9a-fA-F]{8}")


def valid_session_id(value: Any) -> bool:
    """True for a string of exactly eight hex digits (either case)."""
    return isinstance(value, str) and _SESSION_ID_RE.fullmatch(value) is not None


__all__ = ["SESSION_ID_HEX_LENGTH", "valid_session_id"]
