"""
Tests for reservation request normalization.
Covers numeric coercion, timezone resolution, list handling and recurrence fields.
"""

import pytest
from datetime import timedelta
from types import SimpleNamespace

from domain.enums import RepeatMonthlyType, RepeatType
from domain.models import AccessoryRequest, RawReservationRequest
from services.reservation_normalizer import (
    ReservationRequestNormalizer,
    coerce_int,
    coerce_int_list,
    filter_weekdays,
    normalize_reservation_request,
)


# ============================================================================
# Value Coercion Tests
# ============================================================================

@pytest.mark.unit
class TestCoerceInt:
    """Tests for loose integer coercion."""

    @pytest.mark.parametrize("value,expected", [
        (5, 5),
        ("5", 5),
        (" 7 ", 7),
        ("-2", -2),
        (3.0, 3),
        (0, 0),
        ("0", 0),
    ])
    def test_numeric_values(self, value, expected):
        """Test that numeric-looking values become integers."""
        assert coerce_int(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "5abc", 3.5, True, False, [], {}])
    def test_non_numeric_values_are_absent(self, value):
        """Test that non-numeric values become None, not zero."""
        assert coerce_int(value) is None

    def test_oversized_digit_string_is_absent(self):
        """Test that a digit string past the conversion limit becomes None instead of raising."""
        assert coerce_int("9" * 5000) is None
        assert coerce_int_list(["1" * 5000, "3"]) == [3]

    def test_int_list_drops_non_numeric(self):
        """Test that id lists keep only numeric entries."""
        assert coerce_int_list([1, "2", "x", None, 0]) == [1, 2, 0]

    @pytest.mark.parametrize("value", [None, "1,2", 5, {"a": 1}])
    def test_int_list_malformed_is_empty(self, value):
        """Test that absent or non-list input gives an empty list."""
        assert coerce_int_list(value) == []


@pytest.mark.unit
class TestWeekdayFilter:
    """Tests for the lenient weekday filter."""

    def test_out_of_range_days_dropped(self):
        """Test that days outside 0..6 are silently dropped."""
        assert filter_weekdays([0, 3, 6, 7, -1]) == [0, 3, 6]

    def test_string_days_coerced(self):
        """Test that numeric strings are accepted and junk dropped."""
        assert filter_weekdays(["1", "x", "5"]) == [1, 5]

    def test_not_a_list(self):
        """Test that non-list input gives no weekdays."""
        assert filter_weekdays("1,2") == []
        assert filter_weekdays(None) == []


# ============================================================================
# Date/Time Resolution Tests
# ============================================================================

@pytest.mark.unit
class TestDateTimeResolution:
    """Tests for resolving date/time strings into the session timezone."""

    def test_naive_value_is_session_local(self, session):
        """Test that a value without offset is read in the session timezone."""
        spec = normalize_reservation_request({"startDateTime": "2024-01-01 09:00"}, session)

        assert spec.start_date == "2024-01-01"
        assert spec.start_time == "09:00"
        assert spec.start.utcoffset() == timedelta(hours=-5)

    def test_declared_utc_converted_to_session(self, session):
        """Test that a Z value is converted to the session timezone."""
        spec = normalize_reservation_request({"startDateTime": "2024-01-01T14:00:00Z"}, session)

        assert spec.start_date == "2024-01-01"
        assert spec.start_time == "09:00"

    def test_declared_offset_crosses_date(self, session):
        """Test that conversion can move the date component."""
        spec = normalize_reservation_request({"endDateTime": "2024-07-02T01:30:00+00:00"}, session)

        assert spec.end_date == "2024-07-01"
        assert spec.end_time == "21:30"

    def test_compact_offset(self, utc_session):
        """Test offsets written without a colon."""
        spec = normalize_reservation_request({"startDateTime": "2024-03-10T12:00:00+0200"}, utc_session)

        assert spec.start_time == "10:00"

    def test_absent_values_are_none(self, session):
        """Test that missing date/times normalize to None."""
        spec = normalize_reservation_request({}, session)

        assert spec.start is None
        assert spec.start_date is None
        assert spec.start_time is None
        assert spec.end_date is None
        assert spec.end_time is None

    @pytest.mark.parametrize("value", ["not a date", "2024-13-01 09:00", "2024-01-01 25:00", 20240101, ""])
    def test_unparseable_values_are_none(self, session, value):
        """Test that malformed values normalize to None rather than raising."""
        spec = normalize_reservation_request({"startDateTime": value}, session)

        assert spec.start_date is None
        assert spec.start_time is None

    @pytest.mark.parametrize("value", ["2024-01-01T09:05:30.1", "2024-01-01T09:05:30.12345"])
    def test_short_fraction_digits(self, utc_session, value):
        """Test that fractional seconds of any width up to six digits parse."""
        spec = normalize_reservation_request({"startDateTime": value}, utc_session)

        assert spec.start_date == "2024-01-01"
        assert spec.start_time == "09:05"

    def test_repeat_termination_date_is_date_only(self, session):
        """Test that the termination date is rendered as a date."""
        spec = normalize_reservation_request({"repeatTerminationDate": "2024-02-01T03:00:00Z"}, session)

        assert spec.recurrence.repeat_termination_date == "2024-01-31"


# ============================================================================
# Field Normalization Tests
# ============================================================================

@pytest.mark.unit
class TestFieldNormalization:
    """Tests for scalar, list and entry normalization."""

    def test_camel_and_snake_case_names(self, session):
        """Test that wire names and field names are both accepted."""
        camel = normalize_reservation_request({"resourceId": "9"}, session)
        snake = normalize_reservation_request({"resource_id": "9"}, session)

        assert camel.resource_id == 9
        assert snake.resource_id == 9

    def test_zero_resource_id_is_kept(self, session):
        """Test that a zero id stays zero instead of becoming absent."""
        spec = normalize_reservation_request({"resourceId": "0"}, session)

        assert spec.resource_id == 0

    def test_non_numeric_resource_id_is_none(self, session):
        """Test that a non-numeric id becomes None."""
        spec = normalize_reservation_request({"resourceId": "room-1"}, session)

        assert spec.resource_id is None

    def test_user_id_defaults_to_session(self, session):
        """Test that the acting user is the session user by default."""
        spec = normalize_reservation_request({}, session)

        assert spec.user_id == 42

    def test_user_id_from_request(self, session):
        """Test that an explicit user id overrides the session user."""
        spec = normalize_reservation_request({"userId": "100"}, session)

        assert spec.user_id == 100

    def test_id_lists(self, session):
        """Test resource, participant and invitee lists."""
        spec = normalize_reservation_request({
            "resources": [1, "2"],
            "participants": "3",
            "invitees": None,
        }, session)

        assert spec.resource_ids == [1, 2]
        assert spec.participant_ids == []
        assert spec.invitee_ids == []

    def test_accessories_from_mappings_and_objects(self, session):
        """Test accessory entries given as dicts or attribute objects."""
        spec = normalize_reservation_request({
            "accessories": [
                {"accessoryId": "1", "quantityRequested": "2"},
                SimpleNamespace(accessoryId=3, quantityRequested=0),
            ],
        }, session)

        assert spec.accessories == [
            AccessoryRequest(id=1, quantity=2),
            AccessoryRequest(id=3, quantity=0),
        ]

    def test_malformed_accessory_kept_for_reporting(self, session):
        """Test that a malformed accessory entry is kept with missing fields."""
        spec = normalize_reservation_request({"accessories": ["junk", {"accessoryId": 2}]}, session)

        assert spec.accessories == [
            AccessoryRequest(id=None, quantity=None),
            AccessoryRequest(id=2, quantity=None),
        ]

    def test_accessories_not_a_list(self, session):
        """Test that a non-list accessories field is treated as empty."""
        spec = normalize_reservation_request({"accessories": {"accessoryId": 1}}, session)

        assert spec.accessories == []

    def test_attributes_without_id_dropped(self, session):
        """Test that attribute entries need an id."""
        spec = normalize_reservation_request({
            "attributes": [
                {"attributeId": "4", "attributeValue": "blue"},
                {"attributeValue": "orphan"},
                "junk",
            ],
        }, session)

        assert len(spec.attributes) == 1
        assert spec.attributes[0].id == 4
        assert spec.attributes[0].value == "blue"

    def test_title_and_description(self, session):
        """Test free-text fields pass through."""
        spec = normalize_reservation_request({"title": "Standup", "description": 12}, session)

        assert spec.title == "Standup"
        assert spec.description == "12"

    @pytest.mark.parametrize("payload", [["not", "a", "mapping"], "resourceId=5", 5, None])
    def test_non_mapping_request_is_empty(self, session, payload):
        """Test that a payload that is not a mapping normalizes as an empty request."""
        spec = normalize_reservation_request(payload, session)

        assert spec.resource_id is None
        assert spec.start_date is None
        assert spec.user_id == 42
        assert spec.accessories == []

    def test_accepts_raw_request_model(self, session):
        """Test that a RawReservationRequest is used as-is."""
        request = RawReservationRequest(resource_id=3)
        normalizer = ReservationRequestNormalizer(request, session)

        assert normalizer.request is request
        assert normalizer.get_resource_id() == 3


# ============================================================================
# Recurrence Normalization Tests
# ============================================================================

@pytest.mark.unit
class TestRecurrenceNormalization:
    """Tests for recurrence fields."""

    def test_absent_repeat_type_is_none(self, session):
        """Test that a missing repeat type means no repetition."""
        spec = normalize_reservation_request({}, session)

        assert spec.recurrence.repeat_type == RepeatType.NONE
        assert spec.recurrence.repeats is False

    @pytest.mark.parametrize("value,expected", [
        ("Weekly", RepeatType.WEEKLY),
        ("monthly", RepeatType.MONTHLY),
        ("YEARLY", RepeatType.YEARLY),
        ("None", RepeatType.NONE),
    ])
    def test_recognized_repeat_types(self, session, value, expected):
        """Test case-insensitive repeat type lookup."""
        spec = normalize_reservation_request({"repeatType": value}, session)

        assert spec.recurrence.repeat_type == expected

    def test_unrecognized_repeat_type_kept_raw(self, session):
        """Test that an unknown repeat type is kept for the validator."""
        spec = normalize_reservation_request({"repeatType": "fortnightly"}, session)

        assert spec.recurrence.repeat_type == "fortnightly"
        assert spec.recurrence.repeats is True

    def test_monthly_type(self, session):
        """Test monthly type lookup by value and by name."""
        by_value = normalize_reservation_request({"repeatMonthlyType": "dayOfWeek"}, session)
        by_name = normalize_reservation_request({"repeatMonthlyType": "DAY_OF_MONTH"}, session)

        assert by_value.recurrence.repeat_monthly_type == RepeatMonthlyType.DAY_OF_WEEK
        assert by_name.recurrence.repeat_monthly_type == RepeatMonthlyType.DAY_OF_MONTH

    def test_interval_and_weekdays(self, session):
        """Test interval coercion and weekday filtering."""
        spec = normalize_reservation_request({
            "repeatType": "weekly",
            "repeatInterval": "2",
            "repeatWeekdays": [1, 3, 9],
        }, session)

        assert spec.recurrence.repeat_interval == 2
        assert spec.recurrence.repeat_weekdays == [1, 3]
