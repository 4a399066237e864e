"""Assembles role-tagged content blocks for the completion capability."""

import base64

from docchat.documents.models import (
    GroundingPayload,
    ImageGrounding,
    ImageInput,
    TextGrounding,
)

ChatMessage = dict[str, object]

DEFAULT_DOCUMENT_PROMPT = "What is in this document? Summarize its content."
DEFAULT_VISION_PROMPT = "Analyze this document and summarize its content."
DEFAULT_IMAGE_PROMPT = "What is in this image?"


def image_block(url: str) -> dict[str, object]:
    return {"type": "image_url", "image_url": {"url": url}}


def data_url(content: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"


def document_prompt(grounding: GroundingPayload, prompt: str | None) -> str:
    """The question actually asked about the document, falling back to the default."""
    if prompt:
        return prompt
    if isinstance(grounding, ImageGrounding):
        return DEFAULT_VISION_PROMPT
    return DEFAULT_DOCUMENT_PROMPT


def build_document_messages(grounding: GroundingPayload, prompt: str | None) -> list[ChatMessage]:
    """Text grounding goes in the system turn; page images go in the user turn."""
    if isinstance(grounding, TextGrounding):
        return [
            {"role": "system", "content": grounding.body},
            {"role": "user", "content": document_prompt(grounding, prompt)},
        ]
    if isinstance(grounding, ImageGrounding):
        blocks: list[dict[str, object]] = [
            {"type": "text", "text": f"{grounding.caption}\n\n{document_prompt(grounding, prompt)}"}
        ]
        blocks.extend(image_block(data_url(page.png, "image/png")) for page in grounding.pages)
        return [{"role": "user", "content": blocks}]
    raise TypeError(f"Unknown grounding payload: {type(grounding).__name__}")


def build_chat_messages(system_prompt: str, messages: list[ChatMessage]) -> list[ChatMessage]:
    return [{"role": "system", "content": system_prompt}, *messages]


def build_image_messages(image: ImageInput, prompt: str | None) -> list[ChatMessage]:
    if image.content is not None:
        url = data_url(image.content, image.mime_type)
    elif image.url:
        url = image.url
    else:
        raise ValueError("Image URL or content is required")
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": prompt or DEFAULT_IMAGE_PROMPT},
                image_block(url),
            ],
        }
    ]


def first_user_text(messages: list[ChatMessage]) -> str | None:
    """Text of the first user turn, if that turn is a plain string."""
    for message in messages:
        if message.get("role") == "user":
            content = message.get("content")
            return content if isinstance(content, str) else None
    return None
