"""
Shared Response Models
Consistent response formats across the API

WKTParseResponse is the contract for /api/wkt/parse:
- status: "success" or "error" (REQUIRED)
- geometry: {type, value, srid} tree; value nests per geometry type
- metadata: summary (point_count, ring_count, bounds, ...)
"""
from pydantic import BaseModel
from typing import Dict, Any, Optional, List

class BaseResponse(BaseModel):
    """Base response format"""
    status: str  # "success" or "error"
    error: Optional[str] = None

class WKTParseResponse(BaseResponse):
    """Response for the WKT parse endpoint"""
    geometry: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None

class WKTTypesResponse(BaseResponse):
    """Response for the supported geometry types endpoint"""
    geometry_types: List[str] = []
    dimension_markers: List[str] = []
    options: Optional[Dict[str, Any]] = None
