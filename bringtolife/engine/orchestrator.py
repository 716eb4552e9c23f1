"""Generation orchestrator - drives encoder, composer, client and store."""

import logging
from pathlib import Path
from typing import Any, BinaryIO, Callable

from ..clients.gemini import DocumentGenerator, GenerationError
from ..config import DEFAULT_LOCALE
from ..i18n import DEFAULT_CREATION_NAME, notice, validate_locale
from ..models.creation import Creation
from ..models.session import EncodedArtifact, GenerationRequest, GenerationSession
from ..services.codec import ValidationError, export_creation, import_creation
from ..services.encoder import ArtifactEncoder, EncodingError, UnsupportedMediaError
from ..services.prompt import compose_prompt
from ..services.store import CreationStore
from ..utils import name_from_prompt
from .states import (
    Active,
    Event,
    Failed,
    Generating,
    Idle,
    Imported,
    Reset,
    Select,
    State,
    Submit,
    Succeeded,
    ToggleCompare,
    transition,
)

logger = logging.getLogger(__name__)


class GenerationOrchestrator:
    """
    State machine behind the live preview: Idle -> Generating -> Active.

    At most one generation is in flight; submitting while generating raises
    GenerationInProgress. Failures return to Idle with a user-facing notice
    in the current locale and never store anything.

    The generator may be None for import/export-only use; submit then raises.
    """

    def __init__(
        self,
        generator: DocumentGenerator | None,
        store: CreationStore,
        encoder: ArtifactEncoder | None = None,
        locale: str = DEFAULT_LOCALE,
        notify: Callable[[str], None] | None = None,
    ):
        self.generator = generator
        self.store = store
        self.encoder = encoder or ArtifactEncoder()
        self.locale = validate_locale(locale)
        self.notify = notify
        self.state: State = Idle()
        self.notices: list[str] = []

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def active(self) -> Creation | None:
        """Creation currently displayed, if any."""
        return self.state.creation if isinstance(self.state, Active) else None

    @property
    def is_generating(self) -> bool:
        return isinstance(self.state, Generating)

    @property
    def session(self) -> GenerationSession | None:
        return self.state.session if isinstance(self.state, Generating) else None

    def set_locale(self, locale: str) -> None:
        self.locale = validate_locale(locale)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def submit(
        self,
        prompt: str = "",
        file: str | Path | BinaryIO | None = None,
        media_type: str | None = None,
    ) -> Creation | None:
        """
        Generate a creation from free text and/or a file.

        Returns:
            The new creation, or None if encoding/generation failed

        Raises:
            GenerationInProgress: If a generation is already in flight
            GenerationError: If no generator is configured
        """
        if self.generator is None:
            raise GenerationError("No document generator configured")

        prompt = (prompt or "").strip()
        session = GenerationSession(prompt=prompt, locale=self.locale, file_name=_file_name(file))

        # Clears the displayed creation before the first await
        self._apply(Submit(session))
        logger.info(f"Session {session.id} started (file={session.file_name or 'none'})")

        try:
            artifact = await self.encoder.encode(file, media_type) if file is not None else None
            request = GenerationRequest(
                prompt=compose_prompt(prompt, artifact is not None, self.locale),
                payload=artifact.payload if artifact else None,
                media_type=artifact.media_type if artifact else None,
                locale=self.locale,
            )
            document = await self.generator.generate(request)
            if not document:
                raise GenerationError("Generator returned an empty document")
        except UnsupportedMediaError as e:
            self._fail(session, "unsupported_file", e)
            return None
        except (EncodingError, GenerationError) as e:
            self._fail(session, "generation_failed", e)
            return None
        except Exception:
            self._apply(Failed(reason="unexpected error"))
            raise

        creation = Creation(
            name=self._creation_name(prompt, artifact),
            document=document,
            source_image=artifact.data_url if artifact else None,
        )
        try:
            self.store.insert(creation)
        finally:
            # Never stay in Generating once a document exists
            self._apply(Succeeded(creation))
        logger.info(f"Session {session.id} produced creation {creation.id}")
        return creation

    def _creation_name(self, prompt: str, artifact: EncodedArtifact | None) -> str:
        """File name, else first words of the prompt, else the locale default."""
        if artifact and artifact.name:
            return artifact.name
        if prompt:
            return name_from_prompt(prompt)
        return DEFAULT_CREATION_NAME[self.locale]

    def _fail(self, session: GenerationSession, notice_key: str, error: Exception) -> None:
        logger.error(f"Session {session.id} failed: {error}")
        self._apply(Failed(reason=str(error)))
        self._notify(notice(notice_key, self.locale))

    # ------------------------------------------------------------------
    # Browsing
    # ------------------------------------------------------------------

    def reset(self) -> None:
        self._apply(Reset())

    def select(self, creation: Creation) -> None:
        """Display a creation. Never touches the store."""
        self._apply(Select(creation))

    def toggle_compare(self) -> bool:
        """Flip the side-by-side view. Returns the new compare flag."""
        state = self._apply(ToggleCompare())
        return state.compare if isinstance(state, Active) else False

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def import_document(self, raw: str | bytes | dict[str, Any]) -> Creation | None:
        """
        Display an imported creation right away, then merge it into the store.

        Returns:
            The imported creation, or None if the document was invalid
            (a notice is emitted and the state is unchanged)
        """
        try:
            creation = import_creation(raw)
        except ValidationError as e:
            logger.warning(f"Import rejected: {e}")
            self._notify(notice("invalid_import", self.locale))
            return None

        self._apply(Imported(creation))
        if not self.store.insert(creation):
            logger.info(f"Imported creation {creation.id} already in store")
        return creation

    def import_file(self, path: str | Path) -> Creation | None:
        """Import a creation from an exported JSON file."""
        try:
            raw = Path(path).read_bytes()
        except OSError as e:
            logger.warning(f"Import failed: {e}")
            self._notify(notice("import_failed", self.locale))
            return None
        return self.import_document(raw)

    def export_active(self) -> str:
        """
        Portable document for the displayed creation.

        Raises:
            ValueError: If no creation is displayed
        """
        if self.active is None:
            raise ValueError("No active creation to export")
        return export_creation(self.active)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _apply(self, event: Event) -> State:
        self.state = transition(self.state, event)
        return self.state

    def _notify(self, message: str) -> None:
        self.notices.append(message)
        if self.notify:
            self.notify(message)


def _file_name(file: str | Path | BinaryIO | None) -> str | None:
    if file is None:
        return None
    if isinstance(file, (str, Path)):
        return Path(file).name
    name = getattr(file, "name", None)
    return Path(str(name)).name if name else None
