import pytest

from core.config import Config, _reset_config, get_config
from core.utils.constants import DEFAULT_ALLOWED_MIME_TYPES, MAX_FILE_SIZE


class TestGetConfig:
    def test_reads_required_names_from_environment(self) -> None:
        config = get_config()

        assert config.trips_table == "trip-sharing-trips-test"
        assert config.users_table == "trip-sharing-users-test"
        assert config.images_bucket == "trip-sharing-images-test"

    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
        monkeypatch.delenv("MAX_UPLOAD_BYTES", raising=False)
        monkeypatch.delenv("ALLOWED_IMAGE_MIME_TYPES", raising=False)

        config = get_config()

        assert config.endpoint_url is None
        assert config.max_upload_bytes == MAX_FILE_SIZE
        assert config.allowed_mime_types == DEFAULT_ALLOWED_MIME_TYPES
        assert config.connect_timeout == 5.0
        assert config.read_timeout == 30.0

    def test_is_cached_until_reset(self, monkeypatch) -> None:
        first = get_config()
        monkeypatch.setenv("TRIPS_TABLE_NAME", "other-table")

        assert get_config() is first

        _reset_config()
        assert get_config().trips_table == "other-table"

    def test_missing_required_variable_raises(self, monkeypatch) -> None:
        monkeypatch.delenv("TRIP_IMAGES_BUCKET_NAME", raising=False)

        with pytest.raises(RuntimeError, match="TRIP_IMAGES_BUCKET_NAME"):
            get_config()

    def test_overrides_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("AWS_ENDPOINT_URL", "http://localhost:4566/")
        monkeypatch.setenv("IMAGE_PUBLIC_BASE_URL", "https://cdn.example.com/")
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "1024")
        monkeypatch.setenv("ALLOWED_IMAGE_MIME_TYPES", "image/PNG, image/jpeg,")
        monkeypatch.setenv("BLOB_STORE_READ_TIMEOUT", "2.5")

        config = get_config()

        assert config.endpoint_url == "http://localhost:4566"
        assert config.public_base_url == "https://cdn.example.com"
        assert config.max_upload_bytes == 1024
        assert config.allowed_mime_types == frozenset({"image/png", "image/jpeg"})
        assert config.read_timeout == 2.5


class TestConfigModel:
    def test_is_frozen(self) -> None:
        config = Config(images_bucket="b", trips_table="t", users_table="u")

        with pytest.raises(Exception):
            config.images_bucket = "other"  # type: ignore[misc]

    def test_rejects_empty_table_name(self) -> None:
        with pytest.raises(Exception):
            Config(images_bucket="b", trips_table="", users_table="u")
