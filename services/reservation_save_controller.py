"""
Reservation save controller.
Sequences normalization, validation and hand-off to the reservation
handler for create and update calls.
"""

import logging
from typing import Any, List, Mapping, Optional, Protocol, Tuple, Union

from core.logging import LogContext
from core.settings import Settings
from domain.models import (
    NewReservation,
    RawReservationRequest,
    ReservationChange,
    ReservationSeriesUpdate,
    WebServiceUserSession,
)

from services.controller_result import ReservationControllerResult
from services.reservation_normalizer import normalize_reservation_request
from services.reservation_validation import (
    COULD_NOT_PROCESS,
    validate_reservation_request,
    validate_update_request,
)
from services.series_update_scope import resolve_series_update_scope


logger = logging.getLogger(__name__)


class ReservationHandler(Protocol):
    """
    Builds and persists reservations.

    Implementations own conflict detection and storage; the errors they
    return are reported alongside the reference number.
    """

    def build_reservation(self, change: ReservationChange) -> Any:
        """Turn a validated create or update request into a reservation entity."""
        ...

    def handle_reservation(self, reservation: Any) -> Tuple[Optional[str], Optional[List[str]]]:
        """Persist the reservation, returning (reference_number, errors)."""
        ...


class ReservationSaveController:
    """Creates and updates reservations on behalf of a web service session."""

    def __init__(self, handler: ReservationHandler, app_settings: Optional[Settings] = None):
        """
        Initialize the controller.

        Args:
            handler: Collaborator that builds and persists reservations
            app_settings: Settings for request normalization (module settings if omitted)
        """
        self.handler = handler
        self.settings = app_settings

    def create(
        self,
        request: Union[RawReservationRequest, Mapping[str, Any]],
        session: WebServiceUserSession
    ) -> ReservationControllerResult:
        """
        Create a reservation.

        Args:
            request: Raw reservation request
            session: Acting user session

        Returns:
            ReservationControllerResult with the new reference number or errors
        """
        with LogContext(logger, operation="create", user_id=session.user_id) as ctx:
            spec = normalize_reservation_request(request, session, self.settings)

            validation_errors = validate_reservation_request(spec)
            if validation_errors:
                ctx.log("info", "Reservation request rejected", errors=validation_errors)
                return ReservationControllerResult(None, validation_errors)

            return self._save(NewReservation(spec=spec), ctx)

    def update(
        self,
        request: Union[RawReservationRequest, Mapping[str, Any]],
        session: WebServiceUserSession,
        reference_number: Optional[str],
        update_scope: Any = None
    ) -> ReservationControllerResult:
        """
        Update an existing reservation or some occurrences of its series.

        Args:
            request: Raw reservation request
            session: Acting user session
            reference_number: Reference number of the reservation to update
            update_scope: Raw series update scope; the full series when omitted

        Returns:
            ReservationControllerResult with the updated reference number or errors
        """
        with LogContext(
            logger,
            operation="update",
            user_id=session.user_id,
            reference_number=reference_number,
        ) as ctx:
            spec = normalize_reservation_request(request, session, self.settings)

            validation_errors = validate_update_request(spec, reference_number, update_scope)
            if validation_errors:
                ctx.log("info", "Reservation update rejected", errors=validation_errors)
                return ReservationControllerResult(None, validation_errors)

            change = ReservationSeriesUpdate(
                spec=spec,
                reference_number=reference_number,
                update_scope=resolve_series_update_scope(update_scope),
            )
            return self._save(change, ctx)

    def _save(self, change: ReservationChange, ctx: LogContext) -> ReservationControllerResult:
        """Hand a validated change to the handler and collect its outcome."""
        result = ReservationControllerResult()

        try:
            reservation = self.handler.build_reservation(change)
            reference_number, errors = self.handler.handle_reservation(reservation)
        except Exception as e:
            ctx.log("exception", "Reservation handler failed")
            result.set_errors([f"{COULD_NOT_PROCESS} {e}"])
            return result

        result.set_reference_number(reference_number)
        result.set_errors(errors)

        if result.was_successful():
            ctx.log("info", "Reservation saved", saved_reference_number=reference_number)
        else:
            ctx.log("info", "Reservation handler reported errors", errors=result.errors)

        return result
