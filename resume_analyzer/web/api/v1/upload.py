"""Upload helpers for request-size and file-type enforcement before parsing."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from fastapi import UploadFile

from ...errors import APIError


def check_upload_extension(filename: str, allowed_extensions: Iterable[str]) -> str:
    """Return the lower-cased extension of *filename* if it is allowed."""
    allowed = [ext.lower() for ext in allowed_extensions]
    suffix = Path(filename or "").suffix.lower()
    if suffix not in allowed:
        raise APIError(
            400,
            "UNSUPPORTED_FILE_TYPE",
            "Invalid file type. Please upload a supported resume document.",
            {"allowed_extensions": allowed, "filename": filename},
        )
    return suffix


async def read_upload_with_limit(file: UploadFile, max_bytes: int) -> bytes:
    """Read an upload stream with hard byte limit.

    This prevents loading arbitrarily large payloads into memory before validation.
    """
    chunks: list[bytes] = []
    total = 0
    chunk_size = 64 * 1024

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise APIError(
                422,
                "UPLOAD_TOO_LARGE",
                "Uploaded file exceeds size limit",
                {"max_upload_bytes": max_bytes},
            )
        chunks.append(chunk)

    return b"".join(chunks)
