"""Server-sent-event framing for the client stream.

Clients split on the ``data: `` prefix and treat ``[DONE]`` as a sentinel
distinct from JSON payloads, so the exact byte layout matters.
"""

import json

DONE_FRAME = "data: [DONE]\n\n"


def event_frame(payload: dict[str, str]) -> str:
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


def content_frame(delta: str) -> str:
    return event_frame({"content": delta})


def error_frame(message: str) -> str:
    return event_frame({"error": message})
