"""
Central configuration for backend settings.
"""
import os
from typing import Optional


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


# Inputs longer than this are rejected before tokenizing
WKT_MAX_INPUT_LENGTH: int = int(os.getenv("WKT_MAX_INPUT_LENGTH", "1000000"))

# SRID applied by the pipeline when the input carries none (unset = leave as null)
WKT_DEFAULT_SRID: Optional[int] = _optional_int("WKT_DEFAULT_SRID")

# Deepest GEOMETRYCOLLECTION nesting the parser accepts
WKT_MAX_DEPTH: int = int(os.getenv("WKT_MAX_DEPTH", "64"))
