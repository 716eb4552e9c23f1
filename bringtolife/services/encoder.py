"""Artifact encoder - user file to base64 payload + media type."""

import asyncio
import base64
import logging
import mimetypes
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from ..models.session import EncodedArtifact

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
PDF_MAGIC = b"%PDF-"
# Pillow cannot rasterize vector images, pass these through untouched
PASSTHROUGH_IMAGE_TYPES = ("image/svg+xml",)
# Multi-picture camera JPEGs are still plain JPEG to consumers
SNIFFED_MEDIA_TYPES = {"MPO": "image/jpeg"}


class EncodingError(Exception):
    """Failed to read or encode a user file."""

    pass


class UnsupportedMediaError(EncodingError):
    """File is neither an image nor a PDF."""

    pass


class ArtifactEncoder:
    """Encode an image or PDF for the generation request."""

    async def encode(
        self, source: str | Path | BinaryIO, media_type: str | None = None
    ) -> EncodedArtifact:
        """
        Read and encode a file. All-or-nothing.

        Args:
            source: Path to the file, or a binary file object
            media_type: Declared media type (guessed from the name if omitted)

        Returns:
            EncodedArtifact with base64 payload and verified media type

        Raises:
            EncodingError: If the file cannot be read or is not a usable image/PDF
        """
        name, data = await asyncio.to_thread(self._read, source)
        resolved = self._resolve_media_type(name, data, media_type)
        payload = base64.b64encode(data).decode("ascii")
        logger.debug(f"Encoded {name or '<stream>'} as {resolved} ({len(data)} bytes)")
        return EncodedArtifact(payload=payload, media_type=resolved, name=name)

    def _read(self, source: str | Path | BinaryIO) -> tuple[str, bytes]:
        """Read raw bytes, return (file name, bytes)."""
        try:
            if isinstance(source, (str, Path)):
                path = Path(source)
                data = path.read_bytes()
                name = path.name
            else:
                data = source.read()
                name = Path(str(getattr(source, "name", "") or "")).name
        except OSError as e:
            raise EncodingError(f"Failed to read file: {e}") from e

        if not isinstance(data, bytes):
            raise EncodingError("File must be opened in binary mode")
        if not data:
            raise EncodingError(f"File is empty: {name or '<stream>'}")
        return name, data

    def _resolve_media_type(self, name: str, data: bytes, declared: str | None) -> str:
        """
        Media type sent with the file.

        A declared image type is trusted as is. Otherwise the type is guessed
        from the name and the image is sniffed with Pillow.
        """
        declared = (declared or "").lower()
        media_type = declared or (mimetypes.guess_type(name)[0] or "").lower()

        if media_type == PDF_MEDIA_TYPE or data.startswith(PDF_MAGIC):
            if not data.startswith(PDF_MAGIC):
                raise EncodingError(f"Not a valid PDF: {name or '<stream>'}")
            return PDF_MEDIA_TYPE

        if media_type and not media_type.startswith("image/"):
            raise UnsupportedMediaError(f"Unsupported file type: {media_type}")

        if declared or media_type in PASSTHROUGH_IMAGE_TYPES:
            return media_type

        try:
            with Image.open(BytesIO(data)) as img:
                image_format = img.format or ""
        except (UnidentifiedImageError, OSError) as e:
            if media_type:
                raise EncodingError(f"Unreadable image {name or '<stream>'}: {e}") from e
            raise UnsupportedMediaError(f"Unsupported file: {name or '<stream>'}") from e

        return SNIFFED_MEDIA_TYPES.get(image_format) or Image.MIME.get(image_format) or media_type
