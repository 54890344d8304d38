"""
WKT Parsing API Endpoints
"""
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel
from typing import Optional, Dict, Any
import logging

from pipelines.wkt.pipeline import WKTPipeline
from utils.response_models import WKTParseResponse, WKTTypesResponse

logger = logging.getLogger(__name__)
router = APIRouter()


class WKTParseRequest(BaseModel):
    """Request model for parsing a WKT/EWKT string"""
    wkt: str
    options: Optional[Dict[str, Any]] = None


@router.post("/parse", response_model=WKTParseResponse)
async def parse_wkt(request: WKTParseRequest):
    """
    Parse a WKT/EWKT string into a {type, value, srid} geometry tree
    """
    try:
        pipeline = WKTPipeline()
        result = pipeline.process(request.wkt, request.options)

        if not result["success"]:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=result["error"]
            )

        return WKTParseResponse(
            status="success",
            geometry=result["geometry"],
            metadata=result["metadata"]
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"WKT parsing failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"WKT parsing failed: {str(e)}"
        )


@router.get("/types", response_model=WKTTypesResponse)
async def get_wkt_types():
    """
    Get supported geometry types, dimension markers and pipeline options
    """
    options = WKTPipeline().get_available_options()
    return WKTTypesResponse(
        status="success",
        geometry_types=options.pop("geometry_types"),
        dimension_markers=options.pop("dimension_markers"),
        options=options
    )
