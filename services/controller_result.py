"""Outcome of a reservation save or update call."""

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass
class ReservationControllerResult:
    """Reference number of the saved reservation and/or the errors that prevented it."""
    reference_number: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.set_errors(self.errors)

    def set_reference_number(self, reference_number: Optional[str]):
        self.reference_number = reference_number

    def set_errors(self, errors: Union[List[str], str, None]):
        # A single message is one error, not one per character
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors or [])

    def was_successful(self) -> bool:
        """A reference number was produced and no errors were reported."""
        return bool(self.reference_number) and len(self.errors) == 0
