"""Domain models using Pydantic v2 for reservation save requests."""

from datetime import datetime, tzinfo
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.settings import settings
from core.utils_datetime import get_timezone, is_known_timezone

from .enums import RepeatMonthlyType, RepeatType, SeriesUpdateScope


class RawReservationRequest(BaseModel):
    """
    Untrusted reservation request as received from a client.

    Every field is optional and loosely typed; interpretation is left to the
    normalizer. Wire names are camelCase, snake_case names are accepted too.
    """

    resource_id: Any = Field(None, alias="resourceId")
    start_date_time: Any = Field(None, alias="startDateTime")
    end_date_time: Any = Field(None, alias="endDateTime")
    title: Any = None
    description: Any = None
    user_id: Any = Field(None, alias="userId")

    repeat_type: Any = Field(None, alias="repeatType")
    repeat_interval: Any = Field(None, alias="repeatInterval")
    repeat_termination_date: Any = Field(None, alias="repeatTerminationDate")
    repeat_weekdays: Any = Field(None, alias="repeatWeekdays")
    repeat_monthly_type: Any = Field(None, alias="repeatMonthlyType")

    resources: Any = None
    participants: Any = None
    invitees: Any = None
    accessories: Any = None
    attributes: Any = None

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class WebServiceUserSession(BaseModel):
    """Acting user of an authenticated web service call."""

    user_id: int
    timezone: str = Field(default_factory=lambda: settings.default_timezone)

    model_config = ConfigDict(frozen=True)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Ensure the session timezone is a known IANA zone."""
        if not is_known_timezone(v):
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @property
    def tz(self) -> tzinfo:
        """Get the timezone object."""
        return get_timezone(self.timezone)


class AccessoryRequest(BaseModel):
    """Requested accessory and quantity."""

    id: Optional[int] = None
    quantity: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class AttributeRequest(BaseModel):
    """Custom attribute value attached to a reservation."""

    id: int
    value: Any = None

    model_config = ConfigDict(frozen=True)


class RecurrencePattern(BaseModel):
    """
    Recurrence parameters of a reservation series.

    ``repeat_type`` and ``repeat_monthly_type`` hold the enum member when the
    request value was recognized and the raw value otherwise, so that the
    validator can report unrecognized values.
    """

    repeat_type: Union[RepeatType, str] = RepeatType.NONE
    repeat_interval: Optional[int] = None
    repeat_termination_date: Optional[str] = None
    repeat_weekdays: List[int] = Field(default_factory=list)
    repeat_monthly_type: Optional[Union[RepeatMonthlyType, str]] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("repeat_type", mode="before")
    @classmethod
    def coerce_repeat_type(cls, v: Any) -> Any:
        if v is None or v == "":
            return RepeatType.NONE
        member = RepeatType.lookup(v)
        return member if member is not None else str(v)

    @field_validator("repeat_monthly_type", mode="before")
    @classmethod
    def coerce_repeat_monthly_type(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        member = RepeatMonthlyType.lookup(v)
        return member if member is not None else str(v)

    @property
    def repeats(self) -> bool:
        """True when the pattern asks for more than a single occurrence."""
        return bool(self.repeat_type) and self.repeat_type != RepeatType.NONE


class CanonicalReservationSpec(BaseModel):
    """Fully typed reservation request, resolved into the session timezone."""

    resource_id: Optional[int] = None
    user_id: int

    start: Optional[datetime] = None
    end: Optional[datetime] = None
    start_date: Optional[str] = None
    start_time: Optional[str] = None
    end_date: Optional[str] = None
    end_time: Optional[str] = None

    title: Optional[str] = None
    description: Optional[str] = None

    recurrence: RecurrencePattern = Field(default_factory=RecurrencePattern)

    resource_ids: List[int] = Field(default_factory=list)
    participant_ids: List[int] = Field(default_factory=list)
    invitee_ids: List[int] = Field(default_factory=list)
    accessories: List[AccessoryRequest] = Field(default_factory=list)
    attributes: List[AttributeRequest] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class NewReservation(BaseModel):
    """Validated request to create a reservation."""

    kind: Literal["create"] = "create"
    spec: CanonicalReservationSpec

    model_config = ConfigDict(frozen=True)


class ReservationSeriesUpdate(BaseModel):
    """Validated request to update some occurrences of an existing series."""

    kind: Literal["update"] = "update"
    spec: CanonicalReservationSpec
    reference_number: str
    update_scope: SeriesUpdateScope = SeriesUpdateScope.FULL_SERIES

    model_config = ConfigDict(frozen=True)


ReservationChange = Annotated[
    Union[NewReservation, ReservationSeriesUpdate],
    Field(discriminator="kind"),
]
