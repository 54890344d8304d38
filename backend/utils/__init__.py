"""
Utility modules for the WKT backend.
"""

from utils.response_models import BaseResponse, WKTParseResponse, WKTTypesResponse

__all__ = [
    'BaseResponse',
    'WKTParseResponse',
    'WKTTypesResponse'
]
