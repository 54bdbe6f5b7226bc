"""
Vessel location data models.

This module defines the record returned by the WSF Vessels API
``vessellocations`` endpoint and the mapping from its JSON payload.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .legacy_date import UNSET, WSFTime, parse_legacy_date


class VesselDataError(ValueError):
    """Raised when a vessel location payload has missing or mistyped fields."""

    pass


class ManagedBy(Enum):
    """Enumeration of the agencies operating a vessel."""

    UNKNOWN = 0
    WSF = 1  # Washington State Ferries
    KCM = 2  # King County Metro

    @classmethod
    def from_code(cls, code: Optional[int]) -> "ManagedBy":
        """Map an upstream enum code, falling back to UNKNOWN."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class VesselLocation:
    """
    Immutable location and related data for a single vessel.

    Optional fields are None when the API omits them, e.g. the arriving
    terminal of a vessel that is out of service.
    """

    vessel_id: int
    vessel_name: str
    mmsi: Optional[int]
    departing_terminal_id: int
    departing_terminal_name: str
    departing_terminal_abbrev: str
    arriving_terminal_id: Optional[int]
    arriving_terminal_name: Optional[str]
    arriving_terminal_abbrev: Optional[str]
    latitude: float
    longitude: float
    speed: float
    heading: float
    in_service: bool
    at_dock: bool
    left_dock: WSFTime = UNSET
    eta: WSFTime = UNSET
    eta_basis: Optional[str] = None
    scheduled_departure: WSFTime = UNSET
    op_route_abbrev: List[str] = field(default_factory=list)
    vessel_position_num: Optional[int] = None
    sort_seq: int = 0
    managed_by: ManagedBy = ManagedBy.UNKNOWN
    timestamp: WSFTime = UNSET

    @property
    def position(self) -> Tuple[float, float]:
        """Get (latitude, longitude)."""
        return (self.latitude, self.longitude)

    @property
    def is_underway(self) -> bool:
        """Check if the vessel is in service and away from the dock."""
        return self.in_service and not self.at_dock

    @property
    def eta_datetime(self) -> Optional[datetime]:
        """Get the estimated arrival as a datetime if known."""
        return self.eta.to_datetime()

    @property
    def last_updated(self) -> Optional[datetime]:
        """Get the time the position was reported."""
        return self.timestamp.to_datetime()

    def summary(self) -> str:
        """Get a one-line description for display."""
        route = self.departing_terminal_name
        if self.arriving_terminal_name:
            route = f"{route} -> {self.arriving_terminal_name}"

        if not self.in_service:
            state = "out of service"
        elif self.at_dock:
            state = "at dock"
        else:
            state = f"{self.speed:.1f} kn, heading {self.heading:.0f}"

        eta = f", ETA {self.eta}" if not self.eta.is_zero else ""
        return (
            f"{self.vessel_name} ({self.vessel_id}) {route}: {state} "
            f"at {self.latitude:.5f}, {self.longitude:.5f}{eta}"
        )

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "VesselLocation":
        """
        Create a VesselLocation from one object of the API response.

        Args:
            payload: Decoded JSON object using the upstream PascalCase keys

        Returns:
            VesselLocation: The mapped record

        Raises:
            VesselDataError: If a required field is missing or mistyped
            MalformedTimestamp: If a date field is not a legacy date token
        """
        if not isinstance(payload, dict):
            raise VesselDataError(
                f"Vessel location must be an object, got {type(payload).__name__}"
            )

        routes = payload.get("OpRouteAbbrev") or []
        if not isinstance(routes, list):
            raise VesselDataError("OpRouteAbbrev must be a list")

        return cls(
            vessel_id=_required(payload, "VesselID", int),
            vessel_name=_required(payload, "VesselName", str),
            mmsi=_optional(payload, "Mmsi", int),
            departing_terminal_id=_required(payload, "DepartingTerminalID", int),
            departing_terminal_name=_required(payload, "DepartingTerminalName", str),
            departing_terminal_abbrev=_required(payload, "DepartingTerminalAbbrev", str),
            arriving_terminal_id=_optional(payload, "ArrivingTerminalID", int),
            arriving_terminal_name=_optional(payload, "ArrivingTerminalName", str),
            arriving_terminal_abbrev=_optional(payload, "ArrivingTerminalAbbrev", str),
            latitude=_required(payload, "Latitude", float),
            longitude=_required(payload, "Longitude", float),
            speed=_required(payload, "Speed", float),
            heading=_required(payload, "Heading", float),
            in_service=_required(payload, "InService", bool),
            at_dock=_required(payload, "AtDock", bool),
            left_dock=parse_legacy_date(payload.get("LeftDock")),
            eta=parse_legacy_date(payload.get("Eta")),
            eta_basis=_optional(payload, "EtaBasis", str),
            scheduled_departure=parse_legacy_date(payload.get("ScheduledDeparture")),
            op_route_abbrev=[str(route) for route in routes],
            vessel_position_num=_optional(payload, "VesselPositionNum", int),
            sort_seq=_optional(payload, "SortSeq", int) or 0,
            managed_by=ManagedBy.from_code(payload.get("ManagedBy")),
            timestamp=parse_legacy_date(payload.get("TimeStamp")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the upstream key layout."""
        return {
            "VesselID": self.vessel_id,
            "VesselName": self.vessel_name,
            "Mmsi": self.mmsi,
            "DepartingTerminalID": self.departing_terminal_id,
            "DepartingTerminalName": self.departing_terminal_name,
            "DepartingTerminalAbbrev": self.departing_terminal_abbrev,
            "ArrivingTerminalID": self.arriving_terminal_id,
            "ArrivingTerminalName": self.arriving_terminal_name,
            "ArrivingTerminalAbbrev": self.arriving_terminal_abbrev,
            "Latitude": self.latitude,
            "Longitude": self.longitude,
            "Speed": self.speed,
            "Heading": self.heading,
            "InService": self.in_service,
            "AtDock": self.at_dock,
            "LeftDock": self.left_dock.to_json_value(),
            "Eta": self.eta.to_json_value(),
            "EtaBasis": self.eta_basis,
            "ScheduledDeparture": self.scheduled_departure.to_json_value(),
            "OpRouteAbbrev": list(self.op_route_abbrev),
            "VesselPositionNum": self.vessel_position_num,
            "SortSeq": self.sort_seq,
            "ManagedBy": self.managed_by.value,
            "TimeStamp": self.timestamp.to_json_value(),
        }


def parse_vessel_locations(payload: Any) -> List[VesselLocation]:
    """
    Map the body of the vessellocations endpoint.

    A single bad record fails the whole decode.
    """
    if not isinstance(payload, list):
        raise VesselDataError(
            f"Vessel locations must be a list, got {type(payload).__name__}"
        )
    return [VesselLocation.from_dict(item) for item in payload]


def _coerce(key: str, value: Any, expected: type) -> Any:
    # bool is an int subclass; keep it out of numeric fields
    if expected is not bool and isinstance(value, bool):
        raise VesselDataError(f"{key} must be {expected.__name__}, got bool")
    if expected is float and isinstance(value, int):
        return float(value)
    if not isinstance(value, expected):
        raise VesselDataError(
            f"{key} must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


def _required(payload: Dict[str, Any], key: str, expected: type) -> Any:
    if payload.get(key) is None:
        raise VesselDataError(f"Missing required field: {key}")
    return _coerce(key, payload[key], expected)


def _optional(payload: Dict[str, Any], key: str, expected: type) -> Any:
    value = payload.get(key)
    if value is None:
        return None
    return _coerce(key, value, expected)
