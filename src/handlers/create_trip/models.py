"""Pydantic models for trip creation request/response."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from core.models.trip import TripView
from core.utils.constants import TITLE_MAX_LENGTH, USER_ID_MAX_LENGTH


class CreateTripRequest(BaseModel):
    """Validation model for create trip request."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    title: StrictStr = Field(
        ...,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Trip title",
    )
    user_id: StrictStr = Field(
        ...,
        alias="userId",
        min_length=1,
        max_length=USER_ID_MAX_LENGTH,
        description="Identifier of the user creating the trip",
    )

    @field_validator("title")
    @classmethod
    def validate_title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value


class CreateTripResponse(BaseModel):
    """Response model for a created trip."""

    trip: TripView
