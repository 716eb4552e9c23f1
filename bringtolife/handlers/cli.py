"""Command-line entry point: generate, browse, import and export creations."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from ..clients.examples import ExampleClient
from ..clients.gemini import GeminiClient
from ..config import (
    DEFAULT_LOCALE,
    EXAMPLE_URLS,
    GEMINI_API_KEY,
    HISTORY_PATH,
    HISTORY_QUOTA_BYTES,
    LOG_LEVEL,
)
from ..engine.orchestrator import GenerationOrchestrator
from ..i18n import LOCALES
from ..services.codec import export_creation, export_filename
from ..services.store import CreationStore, FileHistoryPort
from ..utils import to_file_slug


def build_store(history_path: str = HISTORY_PATH) -> CreationStore:
    return CreationStore(
        port=FileHistoryPort(history_path, quota_bytes=HISTORY_QUOTA_BYTES),
        examples=ExampleClient(EXAMPLE_URLS),
    )


def build_orchestrator(
    store: CreationStore, locale: str, generator: GeminiClient | None = None
) -> GenerationOrchestrator:
    """Orchestrator whose notices go to stderr. Without a generator it can only import."""
    return GenerationOrchestrator(
        generator=generator,
        store=store,
        locale=locale,
        notify=lambda message: print(message, file=sys.stderr, flush=True),
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bringtolife", description="Bring any artifact to life.")
    ap.add_argument("--history", default=HISTORY_PATH, help="Path of the creation history file")
    ap.add_argument("--locale", choices=LOCALES, default=DEFAULT_LOCALE)
    sub = ap.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a creation from text and/or a file")
    gen.add_argument("prompt", nargs="?", default="")
    gen.add_argument("--file", dest="file_path", help="Image or PDF to bring to life")
    gen.add_argument("--out", dest="out_path", help="Write the generated HTML here")

    sub.add_parser("list", help="List stored creations")

    show = sub.add_parser("show", help="Write a creation's HTML document")
    show.add_argument("creation_id")
    show.add_argument("--out", dest="out_path")

    exp = sub.add_parser("export", help="Export a creation as a portable JSON document")
    exp.add_argument("creation_id")
    exp.add_argument("--out", dest="out_path")

    imp = sub.add_parser("import", help="Import a previously exported creation")
    imp.add_argument("in_path")

    return ap


async def run(args: argparse.Namespace) -> int:
    store = build_store(args.history)
    await store.load()

    if args.command == "list":
        for creation in store:
            print(f"{creation.id}  {creation.created_at:%Y-%m-%d %H:%M}  {creation.name}")
        print(f"\nTotal: {len(store)} creations")
        return 0

    if args.command in ("show", "export"):
        creation = store.get(args.creation_id)
        if creation is None:
            print(f"Error: creation {args.creation_id} not found", file=sys.stderr)
            return 1
        if args.command == "show":
            out_path = Path(args.out_path or f"{to_file_slug(creation.name)}.html")
            out_path.write_text(creation.document, encoding="utf-8")
        else:
            out_path = Path(args.out_path or export_filename(creation.name))
            out_path.write_text(export_creation(creation), encoding="utf-8")
        print(f"Wrote {out_path}")
        return 0

    if args.command == "import":
        creation = build_orchestrator(store, args.locale).import_file(args.in_path)
        if creation is None:
            return 1
        print(f"Imported {creation.name} ({creation.id})")
        return 0

    if not GEMINI_API_KEY:
        print("Error: GEMINI_API_KEY must be set in .env", file=sys.stderr)
        return 1

    orchestrator = build_orchestrator(store, args.locale, GeminiClient(api_key=GEMINI_API_KEY))

    print("Bringing it to life...", flush=True)
    creation = await orchestrator.submit(args.prompt, file=args.file_path)
    if creation is None:
        return 1

    print(f"Created {creation.name} ({creation.id})", flush=True)
    if args.out_path:
        Path(args.out_path).write_text(creation.document, encoding="utf-8")
        print(f"Wrote {args.out_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
