"""
Unit tests for vessel location models.
"""

import dataclasses
from datetime import datetime, timezone

import pytest

from wsf.models.legacy_date import UNSET, MalformedTimestamp, WSFTime
from wsf.models.vessel_data import (
    ManagedBy,
    VesselDataError,
    VesselLocation,
    parse_vessel_locations,
)


class TestManagedBy:
    """Test ManagedBy enum mapping."""

    def test_known_codes(self):
        """Test the upstream enum codes."""
        assert ManagedBy.from_code(1) == ManagedBy.WSF
        assert ManagedBy.from_code(2) == ManagedBy.KCM

    def test_unknown_codes(self):
        """Test unknown or missing codes map to UNKNOWN."""
        assert ManagedBy.from_code(7) == ManagedBy.UNKNOWN
        assert ManagedBy.from_code(None) == ManagedBy.UNKNOWN


class TestVesselLocationFromDict:
    """Test mapping of API objects to VesselLocation."""

    def test_full_record(self, vessel_location_payload):
        """Test every field of an underway vessel is mapped."""
        vessel = VesselLocation.from_dict(vessel_location_payload)

        assert vessel.vessel_id == 1
        assert vessel.vessel_name == "Cathlamet"
        assert vessel.mmsi == 366773040
        assert vessel.departing_terminal_abbrev == "MUK"
        assert vessel.arriving_terminal_name == "Clinton"
        assert vessel.position == (47.9513, -122.3045)
        assert vessel.heading == 270.0
        assert isinstance(vessel.heading, float)
        assert vessel.is_underway
        assert vessel.op_route_abbrev == ["muk-cl"]
        assert vessel.sort_seq == 20
        assert vessel.managed_by == ManagedBy.WSF
        assert vessel.eta_basis.startswith("Vessel departed")

    def test_dates_are_decoded(self, vessel_location_payload):
        """Test legacy date fields are decoded to UTC instants."""
        vessel = VesselLocation.from_dict(vessel_location_payload)

        assert vessel.last_updated == datetime(2016, 4, 24, tzinfo=timezone.utc)
        assert vessel.timestamp.milliseconds == 1461456000000
        assert vessel.left_dock.milliseconds == 1461455700000
        assert vessel.scheduled_departure.milliseconds == 1461455400000
        assert vessel.eta_datetime == datetime(2016, 4, 24, 0, 10, tzinfo=timezone.utc)

    def test_null_optional_fields(self, docked_vessel_payload):
        """Test null optional fields and null dates."""
        vessel = VesselLocation.from_dict(docked_vessel_payload)

        assert vessel.mmsi is None
        assert vessel.arriving_terminal_id is None
        assert vessel.arriving_terminal_name is None
        assert vessel.left_dock is UNSET
        assert vessel.eta.is_zero
        assert vessel.eta_datetime is None
        assert vessel.op_route_abbrev == []
        assert not vessel.is_underway

    def test_absent_optional_fields(self, docked_vessel_payload):
        """Test optional keys may be left out entirely."""
        for key in ("Mmsi", "ArrivingTerminalID", "Eta", "EtaBasis", "OpRouteAbbrev"):
            del docked_vessel_payload[key]

        vessel = VesselLocation.from_dict(docked_vessel_payload)

        assert vessel.mmsi is None
        assert vessel.eta is UNSET
        assert vessel.op_route_abbrev == []

    def test_missing_required_field(self, vessel_location_payload):
        """Test a missing required field is rejected."""
        del vessel_location_payload["VesselName"]

        with pytest.raises(VesselDataError, match="VesselName"):
            VesselLocation.from_dict(vessel_location_payload)

    def test_wrong_type(self, vessel_location_payload):
        """Test mistyped fields are rejected."""
        vessel_location_payload["Latitude"] = "47.95"

        with pytest.raises(VesselDataError, match="Latitude must be float"):
            VesselLocation.from_dict(vessel_location_payload)

    def test_bool_is_not_a_number(self, vessel_location_payload):
        """Test booleans are not accepted for numeric fields."""
        vessel_location_payload["VesselID"] = True

        with pytest.raises(VesselDataError):
            VesselLocation.from_dict(vessel_location_payload)

    def test_routes_must_be_list(self, vessel_location_payload):
        """Test OpRouteAbbrev must be a list."""
        vessel_location_payload["OpRouteAbbrev"] = "muk-cl"

        with pytest.raises(VesselDataError, match="OpRouteAbbrev"):
            VesselLocation.from_dict(vessel_location_payload)

    def test_malformed_date_fails_record(self, vessel_location_payload):
        """Test a malformed date propagates unwrapped."""
        vessel_location_payload["TimeStamp"] = "/Date(123-45-67)/"

        with pytest.raises(MalformedTimestamp):
            VesselLocation.from_dict(vessel_location_payload)

    def test_not_an_object(self):
        """Test non-object input is rejected."""
        with pytest.raises(VesselDataError, match="must be an object"):
            VesselLocation.from_dict(["VesselID", 1])


class TestVesselLocationOutput:
    """Test VesselLocation serialization and display."""

    def test_to_dict_restores_upstream_layout(self, vessel_location_payload):
        """Test to_dict reproduces the upstream keys and date values."""
        vessel = VesselLocation.from_dict(vessel_location_payload)
        result = vessel.to_dict()

        assert set(result) == set(vessel_location_payload)
        assert result["TimeStamp"] == "/Date(1461456000000)/"
        assert result["ManagedBy"] == 1
        assert VesselLocation.from_dict(result) == vessel

    def test_to_dict_round_trips_constructed_dates(self, vessel_location_payload):
        """Test dates built from datetimes survive to_dict and from_dict."""
        vessel = dataclasses.replace(
            VesselLocation.from_dict(vessel_location_payload),
            eta=WSFTime.from_datetime(datetime(1970, 1, 1, 1, 0)),
        )

        restored = VesselLocation.from_dict(vessel.to_dict())

        assert restored.eta.milliseconds == 3600000
        assert restored == vessel

    def test_summary_underway(self, vessel_location_payload):
        """Test the summary of an underway vessel."""
        summary = VesselLocation.from_dict(vessel_location_payload).summary()

        assert summary.startswith("Cathlamet (1) Mukilteo -> Clinton: 12.3 kn")
        assert "ETA 2016-04-24T00:10:00+00:00" in summary

    def test_summary_out_of_service(self, docked_vessel_payload):
        """Test the summary of a vessel out of service."""
        summary = VesselLocation.from_dict(docked_vessel_payload).summary()

        assert "Chelan (2) Anacortes: out of service" in summary
        assert "ETA" not in summary


class TestParseVesselLocations:
    """Test mapping of the whole endpoint body."""

    def test_list(self, vessel_location_payload, docked_vessel_payload):
        """Test each object becomes a record, in order."""
        vessels = parse_vessel_locations(
            [vessel_location_payload, docked_vessel_payload]
        )

        assert [v.vessel_name for v in vessels] == ["Cathlamet", "Chelan"]

    def test_empty_list(self):
        """Test an empty body yields no records."""
        assert parse_vessel_locations([]) == []

    def test_not_a_list(self):
        """Test a non-list body is rejected."""
        with pytest.raises(VesselDataError, match="must be a list"):
            parse_vessel_locations({"Message": "Invalid API Access Code."})

    def test_one_bad_record_fails_all(self, vessel_location_payload):
        """Test a single bad record fails the whole decode."""
        bad = dict(vessel_location_payload, VesselID=None)

        with pytest.raises(VesselDataError):
            parse_vessel_locations([vessel_location_payload, bad])
