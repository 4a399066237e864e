import argparse
import asyncio
import json
import sys
from pathlib import Path

from docchat.config.settings import Settings
from docchat.database.connection import close_pool, init_pool
from docchat.database.repositories.message_repository import PostgresMessageStore
from docchat.documents.classifier import guess_mime_type
from docchat.documents.models import UploadedDocument
from docchat.logging.logger import Log
from docchat.service.chat_service import build_service, error_response
from docchat.streaming.orchestrator import StreamStatus
from docchat.streaming.writers import TextStreamWriter


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docchat",
        description="Ask a question about a document and stream the answer as SSE frames.",
    )
    parser.add_argument("file", type=Path, help="document to analyze")
    parser.add_argument("--prompt", default="", help="question about the document")
    parser.add_argument("--mime", default=None, help="MIME type (guessed from the name if omitted)")
    parser.add_argument("--chat-id", default=None, help="persist the answer into this chat")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Analyze one local file; returns the process exit status."""
    store = PostgresMessageStore() if args.chat_id else None
    service = build_service(settings, store=store)
    try:
        content = args.file.read_bytes()
    except OSError as exc:
        _report_error(400, f"Cannot read {args.file}: {exc.strerror or exc}")
        return 1
    document = UploadedDocument(
        content=content,
        mime_type=args.mime or guess_mime_type(args.file.name),
        filename=args.file.name,
    )
    writer = TextStreamWriter(sys.stdout)
    try:
        outcome = await service.analyze_document(
            document, args.prompt, writer, chat_id=args.chat_id
        )
    except Exception as exc:
        status, body = error_response(exc)
        if status >= 500:
            Log.exception("Document analysis failed")
        _report_error(status, body["error"])
        return 1
    return 0 if outcome.status is StreamStatus.COMPLETED else 1


def _report_error(status: int, message: str) -> None:
    print(json.dumps({"status": status, "error": message}), file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    """Entry point: parse args -> configure logging -> stream the answer."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    if args.chat_id:
        init_pool(settings)
    try:
        exit_code = asyncio.run(run(args, settings))
    finally:
        if args.chat_id:
            close_pool()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
