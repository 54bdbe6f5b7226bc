"""
Data models for the WSF client.

This module contains the decoded API records and the legacy ASP.NET
date type used by their timestamp fields.
"""

from .legacy_date import MalformedTimestamp, WSFTime, UNSET, decode_legacy_date, parse_legacy_date
from .vessel_data import ManagedBy, VesselDataError, VesselLocation, parse_vessel_locations

__all__ = [
    "MalformedTimestamp",
    "WSFTime",
    "UNSET",
    "decode_legacy_date",
    "parse_legacy_date",
    "ManagedBy",
    "VesselDataError",
    "VesselLocation",
    "parse_vessel_locations",
]
