"""
API integration for the WSF client.

This module handles communication with the WSF REST API,
including request construction, error handling, and response parsing.
"""

from .vessels_api_manager import (
    AioHttpClient,
    APIResponse,
    HTTPClient,
    VesselAPIException,
    VesselDataException,
    VesselDataSource,
    VesselNetworkException,
    VesselsService,
    VesselStatusException,
    WSFClient,
    WSFClientFactory,
)

__all__ = [
    "AioHttpClient",
    "APIResponse",
    "HTTPClient",
    "VesselAPIException",
    "VesselDataException",
    "VesselDataSource",
    "VesselNetworkException",
    "VesselsService",
    "VesselStatusException",
    "WSFClient",
    "WSFClientFactory",
]
