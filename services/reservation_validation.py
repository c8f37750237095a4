"""
Reservation request validation.
Structural, enumeration, cross-field and per-item rules over a
CanonicalReservationSpec, reported as an ordered list of messages.
"""

import logging
from typing import Any, Callable, List, Optional

from domain.enums import RepeatMonthlyType, RepeatType, SeriesUpdateScope
from domain.models import AccessoryRequest, CanonicalReservationSpec

from services.series_update_scope import resolve_series_update_scope


logger = logging.getLogger(__name__)


MISSING_RESOURCE_ID = "Missing or invalid resourceId"
MISSING_START_DATE_TIME = "Missing or invalid startDateTime"
MISSING_END_DATE_TIME = "Missing or invalid endDateTime"
INVALID_REPEAT_TYPE = "Invalid repeat type"
MISSING_REPEAT_MONTHLY_TYPE = "Missing or invalid repeatMonthlyType"
MISSING_REPEAT_INTERVAL = "Missing or invalid repeatInterval"
MISSING_REPEAT_TERMINATION_DATE = "Missing or invalid repeatTerminationDate"
INVALID_ACCESSORY = "Invalid accessory"
MISSING_REFERENCE_NUMBER = "Missing or invalid referenceNumber"
MISSING_UPDATE_SCOPE = "Missing or invalid updateScope"
COULD_NOT_PROCESS = "Could not process request."


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


# ============================================================================
# Reservation Rules
# ============================================================================

def check_resource_id(spec: CanonicalReservationSpec) -> List[str]:
    if not _is_positive_int(spec.resource_id):
        return [MISSING_RESOURCE_ID]
    return []


def check_start(spec: CanonicalReservationSpec) -> List[str]:
    if not spec.start_date or not spec.start_time:
        return [MISSING_START_DATE_TIME]
    return []


def check_end(spec: CanonicalReservationSpec) -> List[str]:
    if not spec.end_date or not spec.end_time:
        return [MISSING_END_DATE_TIME]
    return []


def check_repeat_type(spec: CanonicalReservationSpec) -> List[str]:
    repeat_type = spec.recurrence.repeat_type
    if _is_present(repeat_type) and not RepeatType.is_defined(repeat_type):
        return [INVALID_REPEAT_TYPE]
    return []


def check_repeat_monthly_type(spec: CanonicalReservationSpec) -> List[str]:
    """
    Monthly series need a recognized monthly type.

    Runs whether or not the repeat type rule passed.
    """
    recurrence = spec.recurrence
    if RepeatType.lookup(recurrence.repeat_type) is RepeatType.MONTHLY \
            and not RepeatMonthlyType.is_defined(recurrence.repeat_monthly_type):
        return [MISSING_REPEAT_MONTHLY_TYPE]
    return []


def check_repeat_bounds(spec: CanonicalReservationSpec) -> List[str]:
    """Repeating series need a positive interval and a termination date; both are checked."""
    recurrence = spec.recurrence
    if not recurrence.repeats:
        return []

    errors = []
    if not _is_positive_int(recurrence.repeat_interval):
        errors.append(MISSING_REPEAT_INTERVAL)
    if not recurrence.repeat_termination_date:
        errors.append(MISSING_REPEAT_TERMINATION_DATE)
    return errors


def is_valid_accessory(accessory: AccessoryRequest) -> bool:
    return (
        _is_positive_int(accessory.id)
        and accessory.quantity is not None
        and accessory.quantity >= 0
    )


def check_accessories(spec: CanonicalReservationSpec) -> List[str]:
    """One error per invalid accessory, in request order."""
    return [INVALID_ACCESSORY for accessory in spec.accessories if not is_valid_accessory(accessory)]


RESERVATION_RULES: List[Callable[[CanonicalReservationSpec], List[str]]] = [
    check_resource_id,
    check_start,
    check_end,
    check_repeat_type,
    check_repeat_monthly_type,
    check_repeat_bounds,
    check_accessories,
]


# ============================================================================
# Update Rules
# ============================================================================

def check_reference_number(reference_number: Any) -> List[str]:
    if not isinstance(reference_number, str) or not reference_number.strip():
        return [MISSING_REFERENCE_NUMBER]
    return []


def check_update_scope(update_scope: Any) -> List[str]:
    """
    A given scope must be recognized.

    Checked after defaulting, so an omitted scope (full series) never fails.
    """
    if not isinstance(resolve_series_update_scope(update_scope), SeriesUpdateScope):
        return [MISSING_UPDATE_SCOPE]
    return []


# ============================================================================
# Validation Entry Points
# ============================================================================

def validate_reservation_request(spec: CanonicalReservationSpec) -> List[str]:
    """
    Run every reservation rule over a canonical reservation spec.

    All rules run, in order, and their messages are concatenated. An
    unexpected failure while evaluating a rule is reported as a single
    error after whatever was collected; nothing is raised.

    Args:
        spec: Canonical reservation spec

    Returns:
        Ordered list of error messages, empty when the request is valid
    """
    errors: List[str] = []

    try:
        for rule in RESERVATION_RULES:
            errors.extend(rule(spec))
    except Exception as e:
        logger.exception("Reservation validation failed unexpectedly")
        errors.append(f"{COULD_NOT_PROCESS} {e}")

    return errors


def validate_update_request(
    spec: CanonicalReservationSpec,
    reference_number: Optional[str],
    update_scope: Any = None
) -> List[str]:
    """
    Validate a request to update an existing reservation series.

    Args:
        spec: Canonical reservation spec
        reference_number: Reference number of the reservation being updated
        update_scope: Raw series update scope from the request

    Returns:
        Reservation errors followed by reference number and scope errors
    """
    errors = validate_reservation_request(spec)
    errors.extend(check_reference_number(reference_number))
    errors.extend(check_update_scope(update_scope))
    return errors
