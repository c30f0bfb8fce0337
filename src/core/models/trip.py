"""Shared trip and image models.

`Trip`, `TripDetail` and `Image` are the records the repository returns.
The `*View` models are the camelCase shapes written to API responses.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class Image(BaseModel):
    """Reference to a stored photo asset, owned by exactly one trip."""

    model_config = ConfigDict(frozen=True)

    image_id: StrictStr = Field(..., description="Unique image identifier")
    trip_id: StrictStr = Field(..., description="Owning trip identifier")
    location: StrictStr = Field(..., description="Resolvable URL returned by the blob store")
    caption: StrictStr = Field(..., description="Caption supplied on attach")

    file_name: StrictStr | None = Field(None, description="Original client file name")
    tag1: StrictStr | None = None
    tag2: StrictStr | None = None
    tag3: StrictStr | None = None

    storage_key: StrictStr = Field(..., description="Blob store key of the asset")
    mime_type: StrictStr = Field(..., description="Declared content type of the asset")
    file_size: StrictInt = Field(..., description="Asset size in bytes")
    created_at: StrictStr = Field(..., description="ISO-8601 attach timestamp (UTC)")


class Trip(BaseModel):
    """A user-created journey."""

    model_config = ConfigDict(frozen=True)

    trip_id: StrictStr = Field(..., description="Unique trip identifier")
    title: StrictStr = Field(..., description="Trip title")
    user_id: StrictStr = Field(..., description="Owning user identifier")
    created_at: StrictStr = Field(..., description="ISO-8601 creation timestamp (UTC)")
    image_count: StrictInt = Field(0, description="Number of attached images")


class TripDetail(Trip):
    """A trip together with its images in attach order."""

    images: list[Image] = Field(default_factory=list)


class ImageView(BaseModel):
    """Image as exposed by the API."""

    id: str
    file_name: str | None = Field(None, serialization_alias="fileName")
    location: str
    caption: str
    tag1: str | None = None
    tag2: str | None = None
    tag3: str | None = None

    @classmethod
    def from_image(cls, image: Image) -> ImageView:
        return cls(
            id=image.image_id,
            file_name=image.file_name,
            location=image.location,
            caption=image.caption,
            tag1=image.tag1,
            tag2=image.tag2,
            tag3=image.tag3,
        )


class TripView(BaseModel):
    """Trip summary as exposed by the API."""

    id: str
    title: str
    user_id: str = Field(..., serialization_alias="userId")

    @classmethod
    def from_trip(cls, trip: Trip) -> TripView:
        return cls(id=trip.trip_id, title=trip.title, user_id=trip.user_id)


class TripDetailView(TripView):
    images: list[ImageView] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, detail: TripDetail) -> TripDetailView:
        return cls(
            id=detail.trip_id,
            title=detail.title,
            user_id=detail.user_id,
            images=[ImageView.from_image(image) for image in detail.images],
        )
