"""Data models."""

from .creation import Creation, new_creation_id
from .session import EncodedArtifact, GenerationRequest, GenerationSession

__all__ = ["Creation", "EncodedArtifact", "GenerationRequest", "GenerationSession", "new_creation_id"]
