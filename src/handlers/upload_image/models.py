"""Pydantic models for image upload request/response."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from core.models.trip import ImageView


class UploadImageRequest(BaseModel):
    """Validation model for the upload path parameters."""

    model_config = ConfigDict(str_strip_whitespace=True)

    trip_id: StrictStr = Field(..., min_length=1, description="Trip the image is attached to")

    @field_validator("trip_id")
    @classmethod
    def validate_trip_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("trip_id must not be blank")
        return value


class UploadImageResponse(BaseModel):
    """Response model for successful image upload."""

    message: str = Field(..., description="Success message containing the asset location")
    location: str = Field(..., description="Resolvable URL of the stored asset")
    image: ImageView
