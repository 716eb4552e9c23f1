"""Gemini client that turns an artifact prompt into a self-contained HTML app."""

import base64
import binascii
import logging
import re
from typing import Protocol

from google import genai
from google.genai import types

from ..config import GEMINI_MODEL, GENERATION_TEMPERATURE
from ..models.session import GenerationRequest

logger = logging.getLogger(__name__)


SYSTEM_INSTRUCTION = """You are an expert AI Engineer and Product Designer specializing in "bringing artifacts to life".
Your goal is to take a user uploaded file (a polished UI design, a messy napkin sketch, a photo, a document) or a text prompt and generate a fully functional, interactive, single-page HTML/JS/CSS application.

CORE DIRECTIVES:
1. **Analyze & Abstract**:
    - **Sketches/Wireframes**: Detect buttons, inputs, and layout. Turn them into a modern, clean UI.
    - **Real-World Photos (Mundane Objects)**: If the user uploads a photo of a desk, a room, or a fruit bowl, DO NOT just display it. **Gamify it** or build a **Utility** around it.
    - **Technical/Network/Hardware Requests**: Browsers cannot access raw hardware, so build a **High-Fidelity Simulation** with live-updating data.

2. **NO EXTERNAL IMAGES**:
    - **CRITICAL**: Do NOT use <img src="..."> with external URLs.
    - **INSTEAD**: Use **CSS shapes**, **inline SVGs**, **Emojis**, or **CSS gradients**.

3. **Make it Interactive**: The output MUST NOT be static. It needs buttons, sliders, drag-and-drop, or dynamic visualizations.
4. **Self-Contained**: The output must be a single HTML file with embedded CSS (<style>) and JavaScript (<script>). No external dependencies unless absolutely necessary (Tailwind via CDN is allowed).
5. **Language & Direction**:
    - The user's current interface language is provided in the prompt.
    - If the user is using **Arabic (ar)**, the generated app MUST use `dir="rtl"` on the body or main container and include Arabic text where appropriate.
    - If the user is using **English (en)**, use standard LTR.
    - If the user explicitly asks for a specific language in the prompt, prioritize that.

RESPONSE FORMAT:
Return ONLY the raw HTML code. Do not wrap it in markdown code blocks (```html ... ```). Start immediately with <!DOCTYPE html>."""

_LEADING_FENCE = re.compile(r"^```[a-zA-Z]*[ \t]*\r?\n?")
_TRAILING_FENCE = re.compile(r"\r?\n?```$")


class GenerationError(Exception):
    """Failed to generate a document."""

    pass


class DocumentGenerator(Protocol):
    """Anything that can turn a request into an HTML document."""

    async def generate(self, request: GenerationRequest) -> str: ...


def strip_code_fences(text: str) -> str:
    """Remove markdown fences the model may add despite instructions.

    Example: "```html\\n<!DOCTYPE html>...\\n```" -> "<!DOCTYPE html>..."
    """
    text = text.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


class GeminiClient:
    """Client for generating interactive documents via Gemini."""

    def __init__(
        self,
        api_key: str,
        model: str = GEMINI_MODEL,
        temperature: float = GENERATION_TEMPERATURE,
    ):
        self.client = genai.Client(api_key=api_key)
        self.model = model
        self.temperature = temperature

    def build_contents(self, request: GenerationRequest) -> list[types.Part]:
        """Text part first, then the file as inline data (only if a file was supplied)."""
        parts = [types.Part.from_text(text=request.prompt)]

        if request.has_file:
            try:
                data = base64.b64decode(request.payload, validate=True)
            except (binascii.Error, ValueError) as e:
                raise GenerationError(f"File payload is not valid base64: {e}") from e
            parts.append(types.Part.from_bytes(data=data, mime_type=request.media_type))

        return parts

    def build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=SYSTEM_INSTRUCTION,
            temperature=self.temperature,
        )

    async def generate(self, request: GenerationRequest) -> str:
        """
        Generate an HTML document for a composed request.

        Args:
            request: Composed prompt plus optional encoded file

        Returns:
            Sanitized HTML document

        Raises:
            GenerationError: On transport failure, blocked/empty response or empty output
        """
        contents = self.build_contents(request)

        logger.info(
            f"Generating document (model={self.model}, locale={request.locale}, "
            f"file={request.media_type or 'none'})"
        )

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=types.Content(role="user", parts=contents),
                config=self.build_config(),
            )
        except Exception as e:
            logger.error(f"Gemini generation error: {e}")
            raise GenerationError(f"Gemini request failed: {e}") from e

        text = response.text
        if not text:
            raise GenerationError("No content generated by Gemini")

        document = strip_code_fences(text)
        if not document:
            raise GenerationError("Gemini returned an empty document")

        logger.debug(f"Generated document ({len(document)} chars)")
        return document
