import pytest
from pydantic import ValidationError

from core.models.trip import ImageView
from handlers.upload_image.models import UploadImageRequest, UploadImageResponse


class TestUploadImageRequest:
    def test_strips_trip_id(self) -> None:
        assert UploadImageRequest(trip_id="  trip_1 ").trip_id == "trip_1"

    @pytest.mark.parametrize("value", [None, "", "   ", 5])
    def test_rejects_invalid_trip_id(self, value) -> None:
        with pytest.raises(ValidationError):
            UploadImageRequest(trip_id=value)


def test_response_dumps_camel_case_image() -> None:
    response = UploadImageResponse(
        message="File uploaded successfully. URL: https://x/k.jpg",
        location="https://x/k.jpg",
        image=ImageView(id="img_1", file_name="k.jpg", location="https://x/k.jpg", caption="c"),
    )

    dumped = response.model_dump(by_alias=True)

    assert dumped["image"]["fileName"] == "k.jpg"
    assert dumped["location"] == "https://x/k.jpg"
