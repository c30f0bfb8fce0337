import base64

import pytest

from core.models.errors import ValidationError
from core.utils.multipart import decode_body, get_header, parse_multipart


class TestGetHeader:
    def test_is_case_insensitive(self) -> None:
        event = {"headers": {"content-TYPE": "multipart/form-data; boundary=x"}}

        assert get_header(event, "Content-Type") == "multipart/form-data; boundary=x"

    def test_missing_headers(self) -> None:
        assert get_header({"headers": None}, "Content-Type") is None


class TestDecodeBody:
    def test_plain_body_is_utf8_encoded(self) -> None:
        assert decode_body({"body": "hello"}) == b"hello"

    def test_base64_body_is_decoded(self) -> None:
        event = {"body": base64.b64encode(b"\x00\xffdata").decode(), "isBase64Encoded": True}

        assert decode_body(event) == b"\x00\xffdata"

    def test_empty_body(self) -> None:
        assert decode_body({"body": None}) == b""

    def test_invalid_base64_is_malformed(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            decode_body({"body": "not base64!!", "isBase64Encoded": True})

        assert exc_info.value.error_code == "MALFORMED_UPLOAD"


class TestParseMultipart:
    def test_collects_fields_and_file(self, multipart_body, sample_jpeg_binary) -> None:
        body, content_type = multipart_body(
            fields={"caption": "Eiffel at dusk", "tag1": "paris"},
            file=("eiffel.jpg", "image/jpeg", sample_jpeg_binary),
        )

        form = parse_multipart(body, content_type)

        assert form.fields == {"caption": "Eiffel at dusk", "tag1": "paris"}
        upload = form.files["file"]
        assert upload.file_name == "eiffel.jpg"
        assert upload.content_type == "image/jpeg"
        assert upload.data == sample_jpeg_binary

    def test_file_without_content_type(self) -> None:
        boundary = "b0undary"
        body = (
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="file"; filename="a.jpg"\r\n\r\n'
            "abc\r\n"
            f"--{boundary}--\r\n"
        ).encode()

        form = parse_multipart(body, f"multipart/form-data; boundary={boundary}")

        assert form.files["file"].content_type is None
        assert form.files["file"].data == b"abc"

    def test_not_multipart_yields_empty_form(self) -> None:
        form = parse_multipart(b'{"caption": "x"}', "application/json")

        assert form.fields == {}
        assert form.files == {}

    def test_missing_content_type_yields_empty_form(self) -> None:
        form = parse_multipart(b"anything", None)

        assert form.files == {}

    def test_missing_boundary_is_malformed(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_multipart(b"--x\r\n", "multipart/form-data")

        assert exc_info.value.error_code == "MALFORMED_UPLOAD"

    def test_garbage_body_is_malformed(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_multipart(b"this is not a multipart body", "multipart/form-data; boundary=abc")

        assert exc_info.value.error_code == "MALFORMED_UPLOAD"
