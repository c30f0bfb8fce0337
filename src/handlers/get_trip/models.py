from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from core.models.trip import TripDetailView


class GetTripRequest(BaseModel):
    """Validation model for get trip request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    trip_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Trip ID to retrieve",
    )

    @field_validator("trip_id")
    @classmethod
    def validate_trip_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("trip_id must not be blank")
        return value


class GetTripResponse(BaseModel):
    trip: TripDetailView
