"""Multipart form parsing and uploaded files.

``multipart/form-data`` bodies are decoded into a plain dict, like
URL-encoded forms: string fields map to their text (last value wins)
and file fields map to an ``UploadFile``.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from python_multipart.multipart import MultipartParser, parse_options_header


@dataclass(frozen=True, slots=True)
class UploadFile:
    """An uploaded file from a multipart form submission.

    Immutable metadata plus the content, held in memory as bytes
    (suitable for typical web uploads).
    """

    filename: str
    content_type: str
    size: int
    content: bytes = field(repr=False)

    async def read(self) -> bytes:
        """Return the file content as bytes."""
        return self.content

    async def save(self, path: Path) -> None:
        """Write the file content to disk. Parent directories must exist."""
        path.write_bytes(self.content)


def parse_multipart(body: bytes, content_type: str) -> dict[str, Any]:
    """Parse a ``multipart/form-data`` body.

    Raises ``ValueError`` when the boundary is missing or the body is
    malformed (python-multipart parse errors subclass ``ValueError``).
    """
    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if not boundary:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    fields: dict[str, Any] = {}

    # Current part state
    headers: dict[str, str] = {}
    header_field = bytearray()
    header_value = bytearray()
    data = bytearray()

    def on_part_begin() -> None:
        nonlocal data
        headers.clear()
        data = bytearray()

    def on_header_field(chunk: bytes, start: int, end: int) -> None:
        header_field.extend(chunk[start:end])

    def on_header_value(chunk: bytes, start: int, end: int) -> None:
        header_value.extend(chunk[start:end])

    def on_header_end() -> None:
        headers[header_field.decode("latin-1").lower()] = header_value.decode("latin-1")
        header_field.clear()
        header_value.clear()

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        data.extend(chunk[start:end])

    def on_part_end() -> None:
        _, params = parse_options_header(headers.get("content-disposition", ""))
        name = params.get(b"name")
        if name is None:
            return
        filename = params.get(b"filename")
        content = bytes(data)
        if filename is not None:
            fields[name.decode("utf-8")] = UploadFile(
                filename=filename.decode("utf-8"),
                content_type=headers.get("content-type", "application/octet-stream"),
                size=len(content),
                content=content,
            )
        else:
            fields[name.decode("utf-8")] = content.decode("utf-8", errors="replace")

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
        "on_header_end": on_header_end,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
    }

    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()
    return fields
