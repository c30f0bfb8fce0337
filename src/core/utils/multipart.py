"""
Parsing of multipart/form-data bodies delivered through API Gateway.

API Gateway hands the raw request body to Lambda as a string, base64-encoded
when the content type is configured as a binary media type. The parser below
feeds those bytes to python-multipart's streaming parser and collects text
fields and file parts in memory.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any

from aws_lambda_powertools import Logger
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, MultipartState, parse_options_header

from core.models.errors import ValidationError
from core.utils.constants import ERROR_CODE_MALFORMED_UPLOAD

logger = Logger(UTC=True)

MULTIPART_FORM_DATA = b"multipart/form-data"


@dataclass
class UploadedFile:
    """A single file part of a multipart body."""

    field_name: str
    file_name: str | None
    content_type: str | None
    data: bytes


@dataclass
class MultipartForm:
    fields: dict[str, str] = field(default_factory=dict)
    files: dict[str, UploadedFile] = field(default_factory=dict)


def get_header(event: dict[str, Any], name: str) -> str | None:
    """Case-insensitive header lookup on an API Gateway proxy event."""
    headers = event.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def decode_body(event: dict[str, Any]) -> bytes:
    """Return the raw request body bytes of an API Gateway proxy event."""
    body = event.get("body")
    if not body:
        return b""

    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError(
                message="Uploaded body is not valid base64",
                error_code=ERROR_CODE_MALFORMED_UPLOAD,
            ) from exc

    return body.encode("utf-8") if isinstance(body, str) else body


class _FormCollector:
    """Accumulates parser callbacks into a MultipartForm."""

    def __init__(self) -> None:
        self.form = MultipartForm()
        self._headers: dict[bytes, bytes] = {}
        self._header_field = b""
        self._header_value = b""
        self._data = bytearray()

    def on_part_begin(self) -> None:
        self._headers = {}
        self._data = bytearray()

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        self._headers[self._header_field.lower()] = self._header_value
        self._header_field = b""
        self._header_value = b""

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._data.extend(data[start:end])

    def on_part_end(self) -> None:
        disposition, options = parse_options_header(self._headers.get(b"content-disposition", b""))
        if disposition != b"form-data" or b"name" not in options:
            logger.debug("Skipping multipart part without a form-data name")
            return

        name = options[b"name"].decode("utf-8", errors="replace")

        if b"filename" in options:
            content_type = self._headers.get(b"content-type", b"").decode("latin-1").strip()
            self.form.files[name] = UploadedFile(
                field_name=name,
                file_name=options[b"filename"].decode("utf-8", errors="replace") or None,
                content_type=content_type or None,
                data=bytes(self._data),
            )
        else:
            self.form.fields[name] = self._data.decode("utf-8", errors="replace")

    def callbacks(self) -> dict[str, Any]:
        return {
            "on_part_begin": self.on_part_begin,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
        }


def parse_multipart(body: bytes, content_type_header: str | None) -> MultipartForm:
    """Parse a multipart/form-data body.

    A request that is not multipart at all yields an empty form, so the
    caller's own checks report the missing file. A multipart body that
    cannot be parsed raises ValidationError(MALFORMED_UPLOAD).
    """
    if not content_type_header:
        return MultipartForm()

    content_type, params = parse_options_header(content_type_header)
    if content_type != MULTIPART_FORM_DATA:
        logger.debug(
            "Request body is not multipart",
            extra={"content_type": content_type.decode("latin-1")},
        )
        return MultipartForm()

    boundary = params.get(b"boundary")
    if not boundary:
        raise ValidationError(
            message="Multipart request is missing its boundary",
            error_code=ERROR_CODE_MALFORMED_UPLOAD,
        )

    collector = _FormCollector()
    parser = MultipartParser(boundary, collector.callbacks())

    try:
        parser.write(body)
        parser.finalize()
    except MultipartParseError as exc:
        logger.warning("Malformed multipart body", extra={"error": str(exc)})
        raise ValidationError(
            message="Uploaded form data could not be parsed",
            error_code=ERROR_CODE_MALFORMED_UPLOAD,
        ) from exc

    if parser.state != MultipartState.END:
        logger.warning("Multipart body ended before its closing boundary")
        raise ValidationError(
            message="Uploaded form data could not be parsed",
            error_code=ERROR_CODE_MALFORMED_UPLOAD,
        )

    return collector.form
