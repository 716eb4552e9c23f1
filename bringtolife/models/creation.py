"""Creation model - a generated interactive document plus its origin."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from ..utils import utc_now


def new_creation_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Creation:
    """A generated document. Immutable: replacing means remove + insert in the store."""

    name: str
    document: str                      # Self-contained HTML (markup + <style> + <script>)
    id: str = field(default_factory=new_creation_id)
    source_image: str | None = None    # data:<mime>;base64,<payload> of the uploaded file
    created_at: datetime = field(default_factory=utc_now)

    @property
    def has_source_image(self) -> bool:
        return bool(self.source_image)
