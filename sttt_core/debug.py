from __future__ import annotations

import os


def debug_enabled() -> bool:
    """True when STTT_DEBUG is set to a truthy value."""
    return os.getenv('STTT_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


def trace(msg: str) -> None:
    if debug_enabled():
        print(f"[sttt] {msg}")
