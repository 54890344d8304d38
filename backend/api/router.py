"""
Central API Router
Combines all API endpoints into a single router for main.py
"""
from fastapi import APIRouter
from api.endpoints import wkt
from api import logs

# Create the main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(wkt.router, prefix="/api/wkt", tags=["wkt"])
api_router.include_router(logs.router)

# Add a root endpoint for API discovery
@api_router.get("/api")
async def api_root():
    """API root endpoint for discovery"""
    return {
        "message": "WKT Parser API v1.0",
        "documentation": "/docs",
        "endpoints": {
            "parse": "/api/wkt/parse - Parse a WKT/EWKT string into a geometry tree",
            "types": "/api/wkt/types - Supported geometry types and options",
            "logs": "/logs/recent - Recent log records"
        }
    }
