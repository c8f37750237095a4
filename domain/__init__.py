"""Domain layer for reservation save requests."""

from .enums import (
    LookupEnum,
    RepeatType,
    RepeatMonthlyType,
    SeriesUpdateScope,
)
from .models import (
    RawReservationRequest,
    WebServiceUserSession,
    AccessoryRequest,
    AttributeRequest,
    RecurrencePattern,
    CanonicalReservationSpec,
    NewReservation,
    ReservationSeriesUpdate,
    ReservationChange,
)

__all__ = [
    # Enums
    "LookupEnum",
    "RepeatType",
    "RepeatMonthlyType",
    "SeriesUpdateScope",
    # Models
    "RawReservationRequest",
    "WebServiceUserSession",
    "AccessoryRequest",
    "AttributeRequest",
    "RecurrencePattern",
    "CanonicalReservationSpec",
    "NewReservation",
    "ReservationSeriesUpdate",
    "ReservationChange",
]
