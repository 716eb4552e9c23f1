"""Generation session and request models."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from ..utils import utc_now


@dataclass(frozen=True)
class EncodedArtifact:
    """A user file encoded for transport."""
    payload: str          # base64, no data URL prefix
    media_type: str       # e.g. "image/png", "application/pdf"
    name: str = ""        # original file name, used to name the creation

    @property
    def data_url(self) -> str:
        return f"data:{self.media_type};base64,{self.payload}"


@dataclass(frozen=True)
class GenerationRequest:
    """What is sent to the generation backend."""
    prompt: str                       # Composed instruction text
    payload: str | None = None        # base64 file content
    media_type: str | None = None
    locale: str = "en"

    @property
    def has_file(self) -> bool:
        return bool(self.payload and self.media_type)


@dataclass(frozen=True)
class GenerationSession:
    """The single in-flight generation attempt. Never persisted."""
    prompt: str
    locale: str
    file_name: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started_at: datetime = field(default_factory=utc_now)
