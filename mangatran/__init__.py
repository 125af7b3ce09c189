"""
MangaTran: client for a remote manga/text translation endpoint.

Sends text, batches of text, or manga page images to an OpenAI-compatible
chat-completions server and always hands back something usable: the
translation when the call succeeds, the original input (or a placeholder
region for images) when it does not.

Usage:
    from mangatran import TranslationAdapter, TranslatorConfig

    adapter = TranslationAdapter(TranslatorConfig(base_url="http://localhost:8000"))
    text = await adapter.translate_text("こんにちは", "English")
    lines = await adapter.translate_batch(["hi", "bye"], "French", mode="batch")
    regions = await adapter.translate_image(page_b64, "Spanish", width=800, height=600)
"""

__version__ = "0.1.0"
__author__ = "MangaTran Team"
__license__ = "MIT"

from mangatran.core.exceptions import (
    MangaTranError,
    DisallowedModelError,
    TransportError,
    MalformedResponseError,
    ConfigurationError
)
from mangatran.core.models import (
    Mode,
    ChatMessage,
    TranslationRequest,
    TextRegion,
    TranslationOutcome
)
from mangatran.utils.config_loader import TranslatorConfig, load_config
from mangatran.translation.model_selector import select_model, is_model_allowed
from mangatran.translation.adapter import (
    TranslationAdapter,
    translate_text,
    translate_batch,
    translate_image
)

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "MangaTranError", "DisallowedModelError", "TransportError",
    "MalformedResponseError", "ConfigurationError",
    "Mode", "ChatMessage", "TranslationRequest", "TextRegion", "TranslationOutcome",
    "TranslatorConfig", "load_config",
    "select_model", "is_model_allowed",
    "TranslationAdapter", "translate_text", "translate_batch", "translate_image",
]
