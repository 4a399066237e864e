import asyncio
from unittest.mock import MagicMock

import pytest

from docchat.completion.exceptions import UpstreamSetupError
from docchat.config.settings import Settings
from docchat.documents.exceptions import (
    ExtractionFailedError,
    OversizedUploadError,
    UnsupportedFormatError,
)
from docchat.documents.models import ImageInput, TextGrounding, UploadedDocument
from docchat.grounding.messages import DEFAULT_DOCUMENT_PROMPT, DEFAULT_IMAGE_PROMPT
from docchat.service.chat_service import DocumentChatService, build_service, error_response
from docchat.streaming.orchestrator import (
    CompletionOrchestrator,
    StreamStatus,
    derive_title,
)
from docchat.streaming.sse import DONE_FRAME, content_frame
from docchat.streaming.writers import QueueStreamWriter
from tests.fakes import FakeCompletionClient, RecordingWriter


def _service(client: FakeCompletionClient, ingestor: MagicMock | None = None, store=None):
    if ingestor is None:
        ingestor = MagicMock()
        ingestor.ingest.return_value = TextGrounding(body="framed document")
    return DocumentChatService(
        ingestor=ingestor,
        orchestrator=CompletionOrchestrator(client=client, model="m", store=store),
        system_prompt="You are helpful.",
        max_upload_bytes=100,
    )


def _document() -> UploadedDocument:
    return UploadedDocument(content=b"body", mime_type="text/plain", filename="notes.txt")


class TestAnalyzeDocument:
    def test_streams_answer_grounded_in_document(self) -> None:
        client = FakeCompletionClient(["Fine", "."])
        writer = RecordingWriter()

        outcome = asyncio.run(
            _service(client).analyze_document(_document(), "How is it?", writer)
        )

        assert outcome.status is StreamStatus.COMPLETED
        assert writer.frames == [content_frame("Fine"), content_frame("."), DONE_FRAME]
        assert client.calls[0]["messages"] == [
            {"role": "system", "content": "framed document"},
            {"role": "user", "content": "How is it?"},
        ]

    def test_ingestion_error_raises_before_streaming(self) -> None:
        ingestor = MagicMock()
        ingestor.ingest.side_effect = ExtractionFailedError("docx extraction failed")
        client = FakeCompletionClient(["x"])
        writer = RecordingWriter()

        with pytest.raises(ExtractionFailedError):
            asyncio.run(_service(client, ingestor).analyze_document(_document(), "", writer))
        assert client.calls == []
        assert writer.frames == []
        assert writer.closed is True

    def test_prompt_becomes_title_source(self) -> None:
        store = MagicMock()
        store.find_chat.return_value = MagicMock(title="New chat", assistant_message_count=1)
        asyncio.run(
            _service(FakeCompletionClient(["ok"]), store=store).analyze_document(
                _document(), "What changed in Q2?", RecordingWriter(), chat_id="chat-1"
            )
        )
        store.update_chat_title.assert_called_once_with("chat-1", "What changed in Q2?")

    def test_empty_prompt_titles_chat_with_default_question(self) -> None:
        store = MagicMock()
        store.find_chat.return_value = MagicMock(title="New chat", assistant_message_count=1)
        asyncio.run(
            _service(FakeCompletionClient(["ok"]), store=store).analyze_document(
                _document(), "", RecordingWriter(), chat_id="chat-1"
            )
        )
        store.update_chat_title.assert_called_once_with(
            "chat-1", derive_title(DEFAULT_DOCUMENT_PROMPT)
        )

    def test_ingestion_error_releases_queue_consumer(self) -> None:
        ingestor = MagicMock()
        ingestor.ingest.side_effect = UnsupportedFormatError("application/x-msdownload")
        service = _service(FakeCompletionClient(["x"]), ingestor)

        async def scenario() -> None:
            writer = QueueStreamWriter()
            producer = asyncio.create_task(service.analyze_document(_document(), "", writer))
            try:
                await asyncio.wait_for(_drain(writer), 1.0)
            finally:
                with pytest.raises(UnsupportedFormatError):
                    await producer

        with pytest.raises(UnsupportedFormatError):
            asyncio.run(scenario())


class TestChat:
    def test_prepends_system_prompt(self) -> None:
        client = FakeCompletionClient(["Hi"])
        history = [{"role": "user", "content": "Hello"}]

        asyncio.run(_service(client).chat(history, RecordingWriter()))

        assert client.calls[0]["messages"] == [
            {"role": "system", "content": "You are helpful."},
            {"role": "user", "content": "Hello"},
        ]

    def test_rejects_empty_history(self) -> None:
        with pytest.raises(ValueError, match="Messages are required"):
            asyncio.run(_service(FakeCompletionClient([])).chat([], RecordingWriter()))


class TestAnalyzeImage:
    def test_streams_answer(self) -> None:
        client = FakeCompletionClient(["A cat."])
        image = ImageInput(mime_type="image/png", content=b"\x89PNG")

        outcome = asyncio.run(_service(client).analyze_image(image, None, RecordingWriter()))

        assert outcome.answer == "A cat."
        blocks = client.calls[0]["messages"][0]["content"]
        assert blocks[1]["image_url"]["url"].startswith("data:image/png;base64,")

    def test_rejects_unsupported_type(self) -> None:
        image = ImageInput(mime_type="image/tiff", content=b"II*")
        with pytest.raises(UnsupportedFormatError):
            asyncio.run(
                _service(FakeCompletionClient([])).analyze_image(image, None, RecordingWriter())
            )

    def test_rejects_oversized_image(self) -> None:
        image = ImageInput(mime_type="image/jpeg", content=b"x" * 101)
        with pytest.raises(OversizedUploadError):
            asyncio.run(
                _service(FakeCompletionClient([])).analyze_image(image, None, RecordingWriter())
            )

    def test_default_prompt_becomes_title_source(self) -> None:
        store = MagicMock()
        store.find_chat.return_value = MagicMock(title="New chat", assistant_message_count=1)
        image = ImageInput(url="https://example.com/cat.jpg")

        asyncio.run(
            _service(FakeCompletionClient(["A cat."]), store=store).analyze_image(
                image, None, RecordingWriter(), chat_id="chat-1"
            )
        )

        store.update_chat_title.assert_called_once_with("chat-1", DEFAULT_IMAGE_PROMPT)


class TestErrorResponse:
    @pytest.mark.parametrize(
        ("exc", "status"),
        [
            (UnsupportedFormatError("application/x-msdownload"), 415),
            (OversizedUploadError(30, 20), 413),
            (ExtractionFailedError("bad"), 422),
            (UpstreamSetupError("AI provider API error"), 502),
            (ValueError("Messages are required"), 400),
        ],
    )
    def test_maps_known_errors(self, exc: Exception, status: int) -> None:
        code, body = error_response(exc)
        assert code == status
        assert body == {"error": str(exc)}

    def test_hides_unexpected_errors(self) -> None:
        assert error_response(RuntimeError("secret")) == (500, {"error": "Internal server error"})


def test_build_service_end_to_end(sample_pdf_bytes: bytes) -> None:
    service = build_service(Settings(completion_provider="example"))
    writer = RecordingWriter()
    document = UploadedDocument(
        content=sample_pdf_bytes, mime_type="application/pdf", filename="hello.pdf"
    )

    outcome = asyncio.run(service.analyze_document(document, "", writer))

    assert outcome.status is StreamStatus.COMPLETED
    assert outcome.answer == "This is an example answer."
    assert writer.frames[-1] == DONE_FRAME


async def _drain(writer: QueueStreamWriter) -> list[str]:
    return [frame async for frame in writer.frames()]
