"""Reservation save services: normalization, validation and orchestration."""

from .controller_result import ReservationControllerResult
from .reservation_normalizer import ReservationRequestNormalizer, normalize_reservation_request
from .reservation_save_controller import ReservationHandler, ReservationSaveController
from .reservation_validation import validate_reservation_request, validate_update_request
from .series_update_scope import resolve_series_update_scope

__all__ = [
    "ReservationControllerResult",
    "ReservationRequestNormalizer",
    "normalize_reservation_request",
    "ReservationHandler",
    "ReservationSaveController",
    "validate_reservation_request",
    "validate_update_request",
    "resolve_series_update_scope",
]
