import re
from datetime import datetime, timezone

NAME_MAX_WORDS = 4
NAME_MAX_LENGTH = 30


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_file_slug(text: str) -> str:
    """Convert text to a file-safe slug: lowercase, every non-alphanumeric becomes '_'.

    Example: "Chess Clock!" -> "chess_clock_"
    """
    return re.sub(r"[^a-z0-9]", "_", text, flags=re.IGNORECASE).lower()


def name_from_prompt(prompt: str) -> str:
    """Short creation name from the first words of a prompt.

    Example: "a chess clock with two timers" -> "a chess clock with..."
    """
    words = prompt.split()
    name = " ".join(words[:NAME_MAX_WORDS])
    if len(words) > NAME_MAX_WORDS:
        name += "..."
    if len(name) > NAME_MAX_LENGTH:
        name = name[: NAME_MAX_LENGTH - 3] + "..."
    return name
