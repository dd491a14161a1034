"""In-memory multipart/form-data decoding.

The body is scanned as bytes and only part headers are ever decoded to text,
so image payloads survive untouched whatever byte sequences they contain.
"""

import re

from food_detection.errors import MalformedRequest, MissingImage, PayloadTooLarge

_CRLF = b"\r\n"
_LF = b"\n"
_NAME_PARAM = re.compile(
    r'(?:^|;)\s*name\s*=\s*(?:"([^"]*)"|([^;\s]*))', re.IGNORECASE
)


def parse_boundary(content_type: str | None) -> bytes:
    """Extract the boundary token from a multipart Content-Type header."""
    if not content_type:
        raise MalformedRequest(details="Missing Content-Type header")
    media_type, _, params = content_type.partition(";")
    if media_type.strip().lower() != "multipart/form-data":
        received = media_type.strip() or "nothing"
        raise MalformedRequest(
            details=f"Expected multipart/form-data, got {received}"
        )
    for param in params.split(";"):
        key, _, value = param.strip().partition("=")
        if key.strip().lower() == "boundary":
            boundary = value.strip().strip('"')
            if boundary:
                return boundary.encode("latin-1")
    raise MalformedRequest(details="Content-Type header has no multipart boundary")


def extract_file_field(
    body: bytes,
    content_type: str | None,
    *,
    field_name: str = "image",
    max_bytes: int | None = None,
) -> bytes:
    """Return the payload of the first part named ``field_name``."""
    boundary = parse_boundary(content_type)
    delimiter = b"--" + boundary
    position = body.find(delimiter)
    if position == -1:
        raise MalformedRequest(details="Multipart boundary not found in body")

    while True:
        position += len(delimiter)
        if body.startswith(b"--", position):
            break
        headers_start = _skip_line_break(body, position)
        headers_end, content_start = _find_header_end(body, headers_start, delimiter)
        content_end, next_position = _find_part_end(body, content_start, delimiter)
        headers = _parse_headers(body[headers_start:headers_end])
        if _disposition_name(headers.get("content-disposition")) == field_name:
            size = content_end - content_start
            if max_bytes is not None and size > max_bytes:
                raise PayloadTooLarge(
                    details=f"Image is {size} bytes, limit is {max_bytes} bytes"
                )
            if size == 0:
                raise MissingImage(details=f"Field '{field_name}' is empty")
            return body[content_start:content_end]
        position = next_position

    raise MissingImage(details=f"No multipart field named '{field_name}'")


def _skip_line_break(body: bytes, position: int) -> int:
    # Transport padding after the delimiter is allowed before the line break.
    line_end = body.find(_LF, position)
    if line_end == -1:
        raise MalformedRequest(
            details="Multipart delimiter is not followed by a line break"
        )
    return line_end + 1


def _find_header_end(body: bytes, start: int, delimiter: bytes) -> tuple[int, int]:
    if body.startswith(_CRLF, start):
        return start, start + 2
    if body.startswith(_LF, start):
        return start, start + 1
    # The blank line must come before the next delimiter line.
    limit = body.find(_LF + delimiter, start)
    if limit == -1:
        limit = len(body)
    crlf = body.find(_CRLF + _CRLF, start, limit)
    lf = body.find(_LF + _LF, start, limit)
    if crlf != -1 and (lf == -1 or crlf <= lf):
        return crlf, crlf + 4
    if lf != -1:
        return lf, lf + 2
    raise MalformedRequest(details="Could not find the end of part headers")


def _find_part_end(body: bytes, start: int, delimiter: bytes) -> tuple[int, int]:
    index = body.find(_LF + delimiter, start)
    if index == -1:
        raise MalformedRequest(
            details="Multipart part is not terminated by a boundary"
        )
    content_end = index
    if index > start and body[index - 1 : index] == b"\r":
        content_end -= 1
    return content_end, index + 1


def _parse_headers(raw: bytes) -> dict[str, str]:
    headers: dict[str, str] = {}
    for line in raw.decode("latin-1").splitlines():
        name, separator, value = line.partition(":")
        if separator:
            headers[name.strip().lower()] = value.strip()
    return headers


def _disposition_name(disposition: str | None) -> str | None:
    if not disposition:
        return None
    disposition_type, _, params = disposition.partition(";")
    if disposition_type.strip().lower() != "form-data":
        return None
    match = _NAME_PARAM.search(params)
    if match is None:
        return None
    return match.group(1) if match.group(1) is not None else match.group(2)
