"""Prompt composer - builds the instruction text sent to the model."""

from ..i18n import LOCALE_CONTEXT, validate_locale

FILE_ANALYSIS_DIRECTIVE = (
    "Analyze this image/document. Detect what functionality is implied. "
    "If it is a real-world object (like a desk), gamify it. "
    "If it implies a technical tool, build a simulation. "
    "Build a fully interactive web app. "
    "IMPORTANT: Do NOT use external image URLs. Recreate the visuals using CSS, SVGs, or Emojis."
)

DEMO_REQUEST = "Create a demo app that shows off your capabilities."

USER_REQUEST_LABEL = "USER REQUEST:"


def compose_prompt(free_text: str, has_file: bool, locale: str = "en") -> str:
    """
    Build the final prompt.

    Rules, in order:
    1. File attached: the file-analysis directive is the base, even with text.
    2. No file and no text: the demo request is the base (never empty).
    3. Non-empty text: appended as a labeled user request, which takes priority.
    4. A locale context clause is always appended.

    Example: compose_prompt("find hidden wifi", True, "en") ->
        "<directive>\\n\\nUSER REQUEST: find hidden wifi\\n\\nCONTEXT: ..."
    """
    locale = validate_locale(locale)
    text = (free_text or "").strip()

    sections = []
    if has_file:
        sections.append(FILE_ANALYSIS_DIRECTIVE)
    elif not text:
        sections.append(DEMO_REQUEST)

    if text:
        sections.append(f"{USER_REQUEST_LABEL} {text}")

    sections.append(
        f"CONTEXT: The user is currently browsing the interface in {LOCALE_CONTEXT[locale]}. "
        "Adapt the generated application accordingly."
    )
    return "\n\n".join(sections)
