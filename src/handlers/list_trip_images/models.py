"""Pydantic models for listing the images of a trip."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from core.models.trip import ImageView


class ListTripImagesRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    trip_id: StrictStr = Field(..., min_length=1, description="Owning trip ID")

    @field_validator("trip_id")
    @classmethod
    def validate_trip_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("trip_id must not be blank")
        return value


class ListTripImagesResponse(BaseModel):
    """Images of one trip in attach order."""

    images: list[ImageView] = Field(default_factory=list)
