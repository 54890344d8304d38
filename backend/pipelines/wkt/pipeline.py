"""
WKT Parsing Pipeline
Parses WKT/EWKT text and attaches summary metadata for API consumers
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from config import settings

from .errors import WKTSyntaxError
from .parser import Geometry, Parser
from .tokens import DIMENSION_KINDS, GEOMETRY_KINDS

logger = logging.getLogger(__name__)


class WKTPipeline:
    """
    Pipeline wrapping the WKT parser in the ``{"success": ...}`` result envelope
    """

    def __init__(
        self,
        max_input_length: Optional[int] = None,
        default_srid: Optional[int] = None,
        max_depth: Optional[int] = None,
    ):
        self.max_input_length = max_input_length if max_input_length is not None else settings.WKT_MAX_INPUT_LENGTH
        self.max_depth = max_depth if max_depth is not None else settings.WKT_MAX_DEPTH
        self.default_srid = default_srid if default_srid is not None else settings.WKT_DEFAULT_SRID
        self.schema_version = "wkt_v1"

    def process(self, text: str, options: Optional[Dict[str, Any]] = None) -> dict:
        """
        Parse a WKT/EWKT string

        Args:
            text: WKT or EWKT input, optionally prefixed with ``SRID=<int>;``
            options: Processing options (default_srid)

        Returns:
            dict: Result with geometry tree and metadata, or the syntax error details
        """
        validation_errors = self._validate_input(text) + self._validate_options(options)
        if validation_errors:
            logger.warning(f"WKT input rejected: {'; '.join(validation_errors)}")
            return {
                "success": False,
                "error": f"Input validation failed: {'; '.join(validation_errors)}",
                "expected": None,
                "found": None,
                "position": -1
            }

        processing_options = self._get_processing_options(options)

        try:
            geometry = Parser(text, max_depth=self.max_depth).parse()
        except WKTSyntaxError as e:
            logger.warning(f"WKT syntax error at col {e.position}: expected {e.expected}")
            return {"success": False, **e.to_dict()}

        if geometry.srid is None and processing_options["default_srid"] is not None:
            geometry = Geometry(geometry.type, geometry.value, processing_options["default_srid"])

        metadata = self._calculate_metadata(geometry)
        logger.info(
            f"Parsed {geometry.type} with {metadata['point_count']} points (srid={geometry.srid})"
        )

        return {
            "success": True,
            "geometry": geometry.to_dict(),
            "metadata": metadata
        }

    def _validate_input(self, text: Any) -> List[str]:
        errors = []
        if not isinstance(text, str):
            errors.append("WKT input must be a string")
        elif not text.strip():
            errors.append("WKT input is empty")
        elif len(text) > self.max_input_length:
            errors.append(f"WKT input exceeds {self.max_input_length} characters")
        return errors

    def _validate_options(self, options: Optional[Dict[str, Any]]) -> List[str]:
        errors = []
        default_srid = (options or {}).get("default_srid")
        if default_srid is not None and _srid_or_none(default_srid) is None:
            errors.append(f"default_srid must be a non-negative integer, got {default_srid!r}")
        return errors

    def _get_processing_options(self, options: Optional[Dict[str, Any]]) -> dict:
        options = options or {}
        default_srid = options.get("default_srid")
        if default_srid is None:
            return {"default_srid": self.default_srid}
        return {"default_srid": _srid_or_none(default_srid)}

    def _calculate_metadata(self, geometry: Geometry) -> dict:
        points = list(_iter_points(geometry))
        return {
            "geometry_type": geometry.type,
            "srid": geometry.srid,
            "point_count": len(points),
            "ring_count": _ring_count(geometry),
            "member_count": len(geometry.value) if geometry.type == "GEOMETRYCOLLECTION" else 1,
            "bounds": _bounds(points),
            "schema_version": self.schema_version
        }

    def get_available_options(self) -> dict:
        """Get available processing options and their descriptions"""
        return {
            "geometry_types": sorted(kind.name for kind in GEOMETRY_KINDS),
            "dimension_markers": sorted(kind.name for kind in DIMENSION_KINDS),
            "default_srid": {
                "description": "SRID applied when the input has no SRID= prefix",
                "type": "int",
                "default": self.default_srid
            },
            "max_input_length": {
                "description": "Maximum accepted input length in characters",
                "type": "int",
                "default": self.max_input_length
            },
            "max_depth": {
                "description": "Deepest GEOMETRYCOLLECTION nesting accepted",
                "type": "int",
                "default": self.max_depth
            }
        }


def _srid_or_none(value: Any) -> Optional[int]:
    """Non-negative integer SRID from an int or digit string, None when invalid"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        return int(value.strip())
    return None


def _iter_points(geometry: Geometry):
    if geometry.type == "GEOMETRYCOLLECTION":
        for member in geometry.value:
            yield from _iter_points(member)
    elif geometry.type == "POINT":
        yield geometry.value
    elif geometry.type in ("LINESTRING", "MULTIPOINT"):
        yield from geometry.value
    elif geometry.type in ("POLYGON", "MULTILINESTRING"):
        for ring in geometry.value:
            yield from ring
    elif geometry.type == "MULTIPOLYGON":
        for polygon in geometry.value:
            for ring in polygon:
                yield from ring


def _ring_count(geometry: Geometry) -> int:
    if geometry.type == "GEOMETRYCOLLECTION":
        return sum(_ring_count(member) for member in geometry.value)
    if geometry.type in ("POLYGON", "MULTILINESTRING"):
        return len(geometry.value)
    if geometry.type == "MULTIPOLYGON":
        return sum(len(polygon) for polygon in geometry.value)
    return 0


def _bounds(points: List[Tuple[float, float]]) -> Optional[Dict[str, float]]:
    if not points:
        return None
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return {"min_x": min(xs), "min_y": min(ys), "max_x": max(xs), "max_y": max(ys)}
