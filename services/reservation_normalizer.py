"""
Reservation request normalization.
Turns an untrusted RawReservationRequest into a typed CanonicalReservationSpec
resolved in the acting session's timezone.
"""

import logging
import re
from datetime import datetime
from typing import Any, List, Mapping, Optional, Union

from core.settings import Settings, settings as default_settings
from core.utils_datetime import parse_request_datetime
from domain.models import (
    AccessoryRequest,
    AttributeRequest,
    CanonicalReservationSpec,
    RawReservationRequest,
    RecurrencePattern,
    WebServiceUserSession,
)


logger = logging.getLogger(__name__)


INTEGER_PATTERN = re.compile(r'^[+-]?\d+$')

MIN_WEEKDAY = 0
MAX_WEEKDAY = 6


# ============================================================================
# Value Coercion
# ============================================================================

def coerce_int(value: Any) -> Optional[int]:
    """
    Coerce a loosely typed value to an integer.

    Integers, integral floats and strings of digits are accepted. Anything
    else, booleans included, is treated as absent. Zero is a value, not an
    absence.

    Args:
        value: Raw input value

    Returns:
        The integer, or None if the value is absent or not numeric
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if INTEGER_PATTERN.match(text):
            try:
                return int(text)
            except ValueError:
                # Past the interpreter's integer string conversion limit
                return None
    return None


def coerce_str(value: Any) -> Optional[str]:
    """Pass strings through; render numbers as text; drop anything else."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def as_list(value: Any) -> List[Any]:
    """Return list input as a list; anything else (absent or malformed) as []."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def coerce_int_list(values: Any) -> List[int]:
    """Coerce a list of ids, dropping entries that are not numeric."""
    ints = []
    for value in as_list(values):
        coerced = coerce_int(value)
        if coerced is not None:
            ints.append(coerced)
    return ints


def filter_weekdays(values: Any) -> List[int]:
    """
    Keep the weekday numbers within [0, 6].

    Out-of-range and non-numeric values are dropped rather than rejected.
    """
    days = []
    for value in as_list(values):
        day = coerce_int(value)
        if day is not None and MIN_WEEKDAY <= day <= MAX_WEEKDAY:
            days.append(day)
    return days


def _entry_field(entry: Any, *names: str) -> Any:
    """Read a field from a mapping or attribute-style entry."""
    for name in names:
        if isinstance(entry, Mapping):
            if name in entry:
                return entry[name]
        elif hasattr(entry, name):
            return getattr(entry, name)
    return None


# ============================================================================
# Normalizer
# ============================================================================

class ReservationRequestNormalizer:
    """
    Best-effort typed view over a raw reservation request.

    Accessors never raise for missing or malformed fields; they return None
    or an empty list and leave error reporting to the validator.
    A payload that is not a mapping is read as an empty request.
    """

    def __init__(
        self,
        request: Union[RawReservationRequest, Mapping[str, Any]],
        session: WebServiceUserSession,
        app_settings: Optional[Settings] = None
    ):
        if not isinstance(request, RawReservationRequest):
            if not isinstance(request, Mapping):
                if request is not None:
                    logger.debug(f"Ignoring non-mapping request payload: {type(request).__name__}")
                request = {}
            request = RawReservationRequest.model_validate(request)
        self.request = request
        self.session = session
        self.settings = app_settings or default_settings
        self._tz = session.tz

    # -------------------------------------------------------------------------
    # Date/time resolution
    # -------------------------------------------------------------------------

    def _resolve(self, value: Any) -> Optional[datetime]:
        return parse_request_datetime(value, self._tz)

    def _format(self, value: Any, fmt: str) -> Optional[str]:
        resolved = self._resolve(value)
        if resolved is None:
            return None
        return resolved.strftime(fmt)

    def get_start(self) -> Optional[datetime]:
        return self._resolve(self.request.start_date_time)

    def get_end(self) -> Optional[datetime]:
        return self._resolve(self.request.end_date_time)

    def get_start_date(self) -> Optional[str]:
        return self._format(self.request.start_date_time, self.settings.date_format)

    def get_start_time(self) -> Optional[str]:
        return self._format(self.request.start_date_time, self.settings.time_format)

    def get_end_date(self) -> Optional[str]:
        return self._format(self.request.end_date_time, self.settings.date_format)

    def get_end_time(self) -> Optional[str]:
        return self._format(self.request.end_date_time, self.settings.time_format)

    def get_repeat_termination_date(self) -> Optional[str]:
        return self._format(self.request.repeat_termination_date, self.settings.date_format)

    # -------------------------------------------------------------------------
    # Scalars
    # -------------------------------------------------------------------------

    def get_resource_id(self) -> Optional[int]:
        return coerce_int(self.request.resource_id)

    def get_user_id(self) -> int:
        """The request's user id when given, otherwise the acting session user."""
        user_id = coerce_int(self.request.user_id)
        if user_id is not None:
            return user_id
        return self.session.user_id

    def get_title(self) -> Optional[str]:
        return coerce_str(self.request.title)

    def get_description(self) -> Optional[str]:
        return coerce_str(self.request.description)

    # -------------------------------------------------------------------------
    # Recurrence
    # -------------------------------------------------------------------------

    def get_repeat_type(self) -> Any:
        return self.request.repeat_type

    def get_repeat_interval(self) -> Optional[int]:
        return coerce_int(self.request.repeat_interval)

    def get_repeat_weekdays(self) -> List[int]:
        return filter_weekdays(self.request.repeat_weekdays)

    def get_repeat_monthly_type(self) -> Any:
        return self.request.repeat_monthly_type

    def get_recurrence(self) -> RecurrencePattern:
        return RecurrencePattern(
            repeat_type=self.get_repeat_type(),
            repeat_interval=self.get_repeat_interval(),
            repeat_termination_date=self.get_repeat_termination_date(),
            repeat_weekdays=self.get_repeat_weekdays(),
            repeat_monthly_type=self.get_repeat_monthly_type(),
        )

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    def get_resources(self) -> List[int]:
        return coerce_int_list(self.request.resources)

    def get_participants(self) -> List[int]:
        return coerce_int_list(self.request.participants)

    def get_invitees(self) -> List[int]:
        return coerce_int_list(self.request.invitees)

    def get_accessories(self) -> List[AccessoryRequest]:
        """
        One AccessoryRequest per entry, in request order.

        Malformed entries are kept with missing fields so that each one is
        reported by the validator.
        """
        return [
            AccessoryRequest(
                id=coerce_int(_entry_field(entry, "accessoryId", "accessory_id", "id")),
                quantity=coerce_int(_entry_field(entry, "quantityRequested", "quantity_requested", "quantity")),
            )
            for entry in as_list(self.request.accessories)
        ]

    def get_attributes(self) -> List[AttributeRequest]:
        attributes = []
        for entry in as_list(self.request.attributes):
            attribute_id = coerce_int(_entry_field(entry, "attributeId", "attribute_id", "id"))
            if attribute_id is None:
                logger.debug("Dropping attribute entry without an id: %r", entry)
                continue
            attributes.append(AttributeRequest(
                id=attribute_id,
                value=_entry_field(entry, "attributeValue", "attribute_value", "value"),
            ))
        return attributes

    # -------------------------------------------------------------------------
    # Canonical spec
    # -------------------------------------------------------------------------

    def normalize(self) -> CanonicalReservationSpec:
        """Build the canonical reservation spec from every accessor."""
        return CanonicalReservationSpec(
            resource_id=self.get_resource_id(),
            user_id=self.get_user_id(),
            start=self.get_start(),
            end=self.get_end(),
            start_date=self.get_start_date(),
            start_time=self.get_start_time(),
            end_date=self.get_end_date(),
            end_time=self.get_end_time(),
            title=self.get_title(),
            description=self.get_description(),
            recurrence=self.get_recurrence(),
            resource_ids=self.get_resources(),
            participant_ids=self.get_participants(),
            invitee_ids=self.get_invitees(),
            accessories=self.get_accessories(),
            attributes=self.get_attributes(),
        )


def normalize_reservation_request(
    request: Union[RawReservationRequest, Mapping[str, Any]],
    session: WebServiceUserSession,
    app_settings: Optional[Settings] = None
) -> CanonicalReservationSpec:
    """
    Normalize a raw request into a canonical reservation spec.

    Args:
        request: Raw request model or its wire mapping
        session: Acting user session (provides user id and timezone)
        app_settings: Settings for canonical date/time formats

    Returns:
        CanonicalReservationSpec
    """
    return ReservationRequestNormalizer(request, session, app_settings).normalize()
