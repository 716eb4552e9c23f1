"""Import/export codec - Creation <-> portable JSON document."""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from ..models.creation import Creation, new_creation_id
from ..utils import to_file_slug, utc_now

logger = logging.getLogger(__name__)

# Field names written, in this order
FIELD_ORDER = ("id", "name", "document", "sourceImage", "createdAt")

# Field names used by older exports and the remote examples
LEGACY_FIELDS = {
    "document": "html",
    "sourceImage": "originalImage",
    "createdAt": "timestamp",
}


class ValidationError(Exception):
    """Imported document does not have the shape of a creation."""

    pass


def export_filename(name: str) -> str:
    """File name for an exported creation.

    Example: "Chess Clock" -> "chess_clock_artifact.json"
    """
    return f"{to_file_slug(name)}_artifact.json"


def creation_to_dict(creation: Creation) -> dict[str, Any]:
    """Portable record with a fixed key order. sourceImage is omitted when absent."""
    record = {
        "id": creation.id,
        "name": creation.name,
        "document": creation.document,
        "sourceImage": creation.source_image,
        "createdAt": format_timestamp(creation.created_at),
    }
    return {key: record[key] for key in FIELD_ORDER if record[key] is not None}


def creation_from_dict(data: Any) -> Creation:
    """
    Build a Creation from a portable record.

    Strict on document and name, lenient on the rest: a missing id is
    backfilled with a new id, a missing or unreadable createdAt with the
    current time, and a non-string sourceImage is dropped.

    Raises:
        ValidationError: If the record is not an object or lacks document/name
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Expected a JSON object, got {type(data).__name__}")

    document = _field(data, "document")
    name = data.get("name")
    if not isinstance(document, str) or not document.strip():
        raise ValidationError("Missing required field: document")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Missing required field: name")

    creation_id = data.get("id")
    if creation_id is None or creation_id == "":
        creation_id = new_creation_id()

    source_image = _field(data, "sourceImage")
    if source_image is not None and not isinstance(source_image, str):
        logger.warning(f"Dropping non-string sourceImage of creation {creation_id}")
        source_image = None

    created_at = utc_now()
    raw_timestamp = _field(data, "createdAt")
    if raw_timestamp not in (None, ""):
        try:
            created_at = parse_timestamp(raw_timestamp)
        except ValidationError as e:
            logger.warning(f"{e} on creation {creation_id}, using current time")

    return Creation(
        id=str(creation_id),
        name=name,
        document=document,
        source_image=source_image or None,
        created_at=created_at,
    )


def export_creation(creation: Creation) -> str:
    """Serialize one creation as a pretty-printed standalone document."""
    return json.dumps(creation_to_dict(creation), ensure_ascii=False, indent=2)


def import_creation(raw: str | bytes | dict[str, Any]) -> Creation:
    """
    Parse a portable document back into a Creation.

    Raises:
        ValidationError: If the input is not JSON or misses document/name
    """
    if isinstance(raw, dict):
        return creation_from_dict(raw)
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"Not a valid JSON document: {e}") from e
    return creation_from_dict(data)


def encode_history(creations: list[Creation] | tuple[Creation, ...]) -> str:
    """Serialize the ordered collection for persistence."""
    return json.dumps([creation_to_dict(c) for c in creations], ensure_ascii=False)


def history_records(raw: str) -> list[Any]:
    """
    Parse persisted history into raw records.

    Raises:
        ValidationError: If raw is not JSON or not a JSON array
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"History is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValidationError(f"History must be a JSON array, got {type(data).__name__}")
    return data


def decode_records(records: list[Any]) -> list[Creation]:
    """Build creations from raw records, keeping order. Invalid records are skipped with a warning."""
    creations = []
    for index, item in enumerate(records):
        try:
            creations.append(creation_from_dict(item))
        except ValidationError as e:
            logger.warning(f"Skipping history record {index}: {e}")
    return creations


def decode_history(raw: str) -> list[Creation]:
    """Parse a persisted collection, keeping order and skipping invalid records."""
    return decode_records(history_records(raw))


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC, e.g. 2026-10-18T09:30:00.123000+00:00."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def parse_timestamp(value: Any) -> datetime:
    """
    Rebuild an aware datetime from a persisted primitive.

    Accepts ISO-8601 strings (including a trailing "Z") and epoch milliseconds.

    Raises:
        ValidationError: If the value cannot be read as a timestamp
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        raise ValidationError(f"Invalid timestamp: {value!r}")
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValidationError(f"Invalid timestamp: {value!r}") from e
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValidationError(f"Invalid timestamp: {value!r}") from e
    else:
        raise ValidationError(f"Invalid timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _field(data: dict[str, Any], key: str) -> Any:
    """Read a field, falling back to its legacy name."""
    value = data.get(key)
    if value is None and key in LEGACY_FIELDS:
        value = data.get(LEGACY_FIELDS[key])
    return value
