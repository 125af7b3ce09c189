"""
Request builders for the three translate operations.

Each builder returns an immutable TranslationRequest ready to be posted to
the chat-completions endpoint.
"""

from __future__ import annotations
import json
from typing import Optional, Sequence

from mangatran.core.models import ChatMessage, TranslationRequest

JSON_OBJECT_FORMAT = {"type": "json_object"}

DATA_URI_PREFIX = "data:"
DEFAULT_IMAGE_MIME = "image/png"

TEXT_SYSTEM_PROMPT = "Translate the user's text into {target_lang}."

BATCH_SYSTEM_PROMPT = (
    "Translate each entry in the provided array into {target_lang}. "
    "Return JSON with a \"translations\" array of translated strings in the same order."
)

IMAGE_SYSTEM_PROMPT = (
    "You translate manga images into {target_lang}. "
    "Extract all readable text from the provided image and return translated text."
    " Respond strictly with JSON: {{\"translations\":[{{\"translatedText\":string,"
    "\"originalLanguage\":string,\"minX\":number,\"minY\":number,\"maxX\":number,\"maxY\":number}}]}}."
    " Use bounding boxes normalized to the image if exact boxes are unknown,"
    " covering the entire image as a fallback."
)

IMAGE_USER_PROMPT = "Translate this image."


def to_data_uri(image_data: Optional[str], mime_type: str = DEFAULT_IMAGE_MIME) -> str:
    """
    Return an embeddable data URI for the image.

    Data that already is a data URI passes through unchanged; anything else is
    treated as base64 pixel data and wrapped.
    """
    if image_data and image_data.startswith(DATA_URI_PREFIX):
        return image_data
    return f"data:{mime_type};base64,{image_data or ''}"


def build_text_request(text: str, target_lang: str, model: str) -> TranslationRequest:
    """Single free-text translation; no structured output."""
    return TranslationRequest(
        model=model,
        messages=(
            ChatMessage("system", TEXT_SYSTEM_PROMPT.format(target_lang=target_lang)),
            ChatMessage("user", text),
        ),
    )


def build_batch_request(texts: Sequence[str], target_lang: str, model: str) -> TranslationRequest:
    """Ordered batch translation answered as ``{"translations": [...]}``."""
    return TranslationRequest(
        model=model,
        messages=(
            ChatMessage("system", BATCH_SYSTEM_PROMPT.format(target_lang=target_lang)),
            ChatMessage("user", json.dumps({"texts": list(texts)}, ensure_ascii=False)),
        ),
        response_format=JSON_OBJECT_FORMAT,
    )


def build_image_request(image_data: Optional[str], target_lang: str, model: str) -> TranslationRequest:
    """Region extraction + translation for one image."""
    return TranslationRequest(
        model=model,
        messages=(
            ChatMessage("system", IMAGE_SYSTEM_PROMPT.format(target_lang=target_lang)),
            ChatMessage("user", (
                {"type": "text", "text": IMAGE_USER_PROMPT},
                {"type": "image_url", "image_url": {"url": to_data_uri(image_data)}},
            )),
        ),
        response_format=JSON_OBJECT_FORMAT,
    )
