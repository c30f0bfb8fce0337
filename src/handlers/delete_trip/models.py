from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class DeleteTripRequest(BaseModel):
    """Validation model for delete trip request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    trip_id: StrictStr = Field(..., min_length=1, description="Trip ID to delete")

    @field_validator("trip_id")
    @classmethod
    def validate_trip_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("trip_id must not be blank")
        return value


class DeleteTripResponse(BaseModel):
    """Response model for trip deletion."""

    deleted: str = Field(..., description="Identifier of the deleted trip")
