"""
Global pytest configuration and fixtures.
"""

import json
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from wsf.api.vessels_api_manager import APIResponse
from wsf.managers.config_manager import APIConfig, ConfigData


@pytest.fixture
def test_api_config():
    """Provide an API configuration for client tests."""
    return APIConfig(
        access_code="test-access-code",
        base_url="http://www.wsdot.wa.gov/ferries/api/",
        user_agent="wsf-client/test",
        timeout_seconds=10,
    )


@pytest.fixture
def test_config(test_api_config):
    """Provide a complete configuration."""
    return ConfigData(api=test_api_config)


@pytest.fixture
def vessel_location_payload():
    """Provide one vessel location object as returned by the API."""
    return {
        "VesselID": 1,
        "VesselName": "Cathlamet",
        "Mmsi": 366773040,
        "DepartingTerminalID": 9,
        "DepartingTerminalName": "Mukilteo",
        "DepartingTerminalAbbrev": "MUK",
        "ArrivingTerminalID": 5,
        "ArrivingTerminalName": "Clinton",
        "ArrivingTerminalAbbrev": "CLI",
        "Latitude": 47.9513,
        "Longitude": -122.3045,
        "Speed": 12.3,
        "Heading": 270,
        "InService": True,
        "AtDock": False,
        "LeftDock": "/Date(1461455700000-0700)/",
        "Eta": "/Date(1461456600000-0700)/",
        "EtaBasis": "Vessel departed Mukilteo at 4:55PM",
        "ScheduledDeparture": "/Date(1461455400000-0700)/",
        "OpRouteAbbrev": ["muk-cl"],
        "VesselPositionNum": 1,
        "SortSeq": 20,
        "ManagedBy": 1,
        "TimeStamp": "/Date(1461456000000-0700)/",
    }


@pytest.fixture
def docked_vessel_payload():
    """Provide a vessel that is out of service, with optional fields null."""
    return {
        "VesselID": 2,
        "VesselName": "Chelan",
        "Mmsi": None,
        "DepartingTerminalID": 1,
        "DepartingTerminalName": "Anacortes",
        "DepartingTerminalAbbrev": "ANA",
        "ArrivingTerminalID": None,
        "ArrivingTerminalName": None,
        "ArrivingTerminalAbbrev": None,
        "Latitude": 48.5066,
        "Longitude": -122.6772,
        "Speed": 0,
        "Heading": 191,
        "InService": False,
        "AtDock": True,
        "LeftDock": None,
        "Eta": None,
        "EtaBasis": None,
        "ScheduledDeparture": None,
        "OpRouteAbbrev": [],
        "VesselPositionNum": None,
        "SortSeq": 10,
        "ManagedBy": 1,
        "TimeStamp": "/Date(1461456000000-0700)/",
    }


@pytest.fixture
def vessel_locations_body(vessel_location_payload, docked_vessel_payload):
    """Provide the raw endpoint body, with escaped slashes as on the wire."""
    body = json.dumps([vessel_location_payload, docked_vessel_payload])
    return body.replace("/Date(", "\\/Date(").replace(")/", ")\\/")


@pytest.fixture
def make_response():
    """Provide a builder of APIResponse objects for a mocked transport."""

    def _make_response(
        status_code: int = 200, data: Any = None, body: str = ""
    ) -> APIResponse:
        return APIResponse(
            status_code=status_code,
            data=data,
            timestamp=datetime.now(),
            url="http://www.wsdot.wa.gov/ferries/api/Vessels/rest/vessellocations",
            body=body,
        )

    return _make_response


@pytest.fixture
def temp_config_file():
    """Provide a temporary config file for testing."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        json.dump(
            {
                "api": {
                    "access_code": "file-access-code",
                    "base_url": "https://example.com/ferries/api/",
                    "user_agent": "wsf-client/test",
                    "timeout_seconds": 15,
                }
            },
            f,
            indent=2,
        )
        temp_path = f.name

    yield temp_path

    Path(temp_path).unlink(missing_ok=True)
