import asyncio

from docchat.completion.exceptions import CompletionError
from docchat.completion.factory import CompletionClientFactory
from docchat.config.settings import Settings
from docchat.database.repositories.base import BaseMessageStore
from docchat.documents.exceptions import (
    DocumentError,
    OversizedUploadError,
    UnsupportedFormatError,
)
from docchat.documents.models import ImageInput, UploadedDocument
from docchat.grounding.messages import (
    DEFAULT_IMAGE_PROMPT,
    ChatMessage,
    build_chat_messages,
    build_document_messages,
    build_image_messages,
    document_prompt,
    first_user_text,
)
from docchat.grounding.prompt_loader import load_system_prompt
from docchat.processor.processor import DocumentIngestor, build_ingestor
from docchat.streaming.orchestrator import (
    CompletionOrchestrator,
    CompletionRequest,
    StreamOutcome,
)
from docchat.streaming.writers import BaseStreamWriter

SUPPORTED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})


class DocumentChatService:
    """Entry points for the three streamed operations.

    Every method either raises before writing anything (DocumentError,
    CompletionError, ValueError) or returns once the stream on ``writer``
    has been terminated. On the raising path ``writer.fail`` is called first
    so a consumer waiting on the stream is released.
    """

    def __init__(
        self,
        *,
        ingestor: DocumentIngestor,
        orchestrator: CompletionOrchestrator,
        system_prompt: str,
        max_upload_bytes: int,
    ) -> None:
        self._ingestor = ingestor
        self._orchestrator = orchestrator
        self._system_prompt = system_prompt
        self._max_upload_bytes = max_upload_bytes

    async def analyze_document(
        self,
        document: UploadedDocument,
        prompt: str | None,
        writer: BaseStreamWriter,
        chat_id: str | None = None,
    ) -> StreamOutcome:
        try:
            grounding = await asyncio.to_thread(self._ingestor.ingest, document)
        except Exception as exc:
            await writer.fail(exc)
            raise
        request = CompletionRequest(
            messages=build_document_messages(grounding, prompt),
            chat_id=chat_id,
            title_source=document_prompt(grounding, prompt),
        )
        return await self._orchestrator.stream(request, writer)

    async def chat(
        self,
        messages: list[ChatMessage],
        writer: BaseStreamWriter,
        chat_id: str | None = None,
    ) -> StreamOutcome:
        if not messages:
            exc = ValueError("Messages are required")
            await writer.fail(exc)
            raise exc
        request = CompletionRequest(
            messages=build_chat_messages(self._system_prompt, messages),
            chat_id=chat_id,
            title_source=first_user_text(messages),
        )
        return await self._orchestrator.stream(request, writer)

    async def analyze_image(
        self,
        image: ImageInput,
        prompt: str | None,
        writer: BaseStreamWriter,
        chat_id: str | None = None,
    ) -> StreamOutcome:
        try:
            self._check_image(image)
            messages = build_image_messages(image, prompt)
        except (DocumentError, ValueError) as exc:
            await writer.fail(exc)
            raise
        request = CompletionRequest(
            messages=messages,
            chat_id=chat_id,
            title_source=prompt or DEFAULT_IMAGE_PROMPT,
        )
        return await self._orchestrator.stream(request, writer)

    def _check_image(self, image: ImageInput) -> None:
        if image.content is None:
            return
        if image.mime_type.lower() not in SUPPORTED_IMAGE_TYPES:
            raise UnsupportedFormatError(image.mime_type)
        if len(image.content) > self._max_upload_bytes:
            raise OversizedUploadError(len(image.content), self._max_upload_bytes)


def error_response(exc: Exception) -> tuple[int, dict[str, str]]:
    """Status code and body for a failure raised before streaming began."""
    if isinstance(exc, (DocumentError, CompletionError)):
        return exc.status_code, {"error": str(exc)}
    if isinstance(exc, ValueError):
        return 400, {"error": str(exc)}
    return 500, {"error": "Internal server error"}


def build_service(
    settings: Settings,
    store: BaseMessageStore | None = None,
) -> DocumentChatService:
    """Build a DocumentChatService with all required adapters."""
    orchestrator = CompletionOrchestrator(
        client=CompletionClientFactory.create(settings),
        model=settings.completion_model_name,
        temperature=settings.completion_temperature,
        store=store,
        default_chat_title=settings.default_chat_title,
        title_max_chars=settings.title_max_chars,
    )
    return DocumentChatService(
        ingestor=build_ingestor(settings),
        orchestrator=orchestrator,
        system_prompt=load_system_prompt(),
        max_upload_bytes=settings.max_upload_bytes,
    )
