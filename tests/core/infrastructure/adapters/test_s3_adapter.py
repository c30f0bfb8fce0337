import pytest
from botocore.exceptions import ClientError

from core.config import Config
from core.infrastructure.adapters.s3_adapter import S3Adapter


class TestS3Adapter:
    def test_uses_configured_bucket(self, aws_mock):
        config = Config(images_bucket="custom-bucket", trips_table="t", users_table="u")

        adapter = S3Adapter(config)

        assert adapter.bucket == "custom-bucket"

    def test_retries_are_disabled(self, aws_mock):
        adapter = S3Adapter()

        retries = adapter._client.meta.config.retries
        assert retries["total_max_attempts"] == 1

    def test_put_object_success(self, s3_bucket, s3_get_object):
        adapter = S3Adapter()

        adapter.put_object(
            key="trips/trip_1/img_1.jpg",
            body=b"image-bytes",
            content_type="image/jpeg",
            metadata={"trip_id": "trip_1"},
        )

        assert s3_get_object("trips/trip_1/img_1.jpg") == b"image-bytes"

    def test_put_object_missing_bucket_raises_client_error(self, aws_mock):
        adapter = S3Adapter()

        with pytest.raises(ClientError) as exc:
            adapter.put_object(key="k", body=b"x", content_type="image/png", metadata={})

        assert exc.value.response["Error"]["Code"] == "NoSuchBucket"
