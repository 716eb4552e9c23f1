"""Business logic services."""

from .codec import ValidationError, export_creation, export_filename, import_creation
from .encoder import ArtifactEncoder, EncodingError, UnsupportedMediaError
from .prompt import compose_prompt
from .store import CreationStore, FileHistoryPort, HistoryPort, MemoryHistoryPort, PersistenceError

__all__ = [
    "ArtifactEncoder",
    "CreationStore",
    "EncodingError",
    "FileHistoryPort",
    "HistoryPort",
    "MemoryHistoryPort",
    "PersistenceError",
    "UnsupportedMediaError",
    "ValidationError",
    "compose_prompt",
    "export_creation",
    "export_filename",
    "import_creation",
]
