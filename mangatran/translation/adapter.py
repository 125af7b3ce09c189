"""
Translation adapter for an OpenAI-compatible chat-completions endpoint.

The adapter turns three caller operations (text, batch, image) into
chat-completions requests and normalizes whatever comes back:

1. Select a backend model from the caller's mode
2. Refuse models outside the allow-list before touching the network
3. Build the request, call the endpoint (one retry, per-attempt timeout)
4. Validate the reply and fall back to the original input on any failure

None of the public operations raise. The ``*_outcome`` variants report
whether the value is a real translation or a fallback, and why.
"""

import asyncio
import functools
import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from mangatran.core.exceptions import (
    ConfigurationError,
    DisallowedModelError,
    MalformedResponseError,
    MangaTranError,
    TransportError,
)
from mangatran.core.models import Mode, TranslationOutcome, TranslationRequest, fallback_image_result
from mangatran.translation.model_selector import is_model_allowed, select_model
from mangatran.translation.prompts import build_batch_request, build_image_request, build_text_request
from mangatran.translation.transport import AiohttpFetcher, Fetch
from mangatran.utils.config_loader import TranslatorConfig, load_config
from mangatran.utils.retry import always_retry, with_retry

logger = logging.getLogger(__name__)

# One call plus one retry
CALL_ATTEMPTS = 2

ModeLike = Union[Mode, str, None]
ImageResult = Dict[str, Any]


def first_message_content(response: Any) -> Any:
    """Return ``choices[0].message.content`` or None when the reply lacks it."""
    try:
        return response["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None


def _parse_json_content(content: Any, operation: str) -> Any:
    try:
        return json.loads(content)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(
            f"Reply content is not valid JSON: {e}",
            operation=operation,
            content=content
        ) from e


def _as_error(error: Exception) -> MangaTranError:
    if isinstance(error, MangaTranError):
        return error
    return MangaTranError(
        f"{type(error).__name__}: {error}",
        details={"error_type": type(error).__name__}
    )


class TranslationAdapter:
    """Client for the remote translation endpoint with fallback semantics."""

    def __init__(self, config: Optional[TranslatorConfig] = None, fetch: Optional[Fetch] = None):
        """
        Args:
            config: Endpoint, allow-list, model tiers and timeout
            fetch: ``async fetch(url, payload) -> dict``; defaults to aiohttp
        """
        self.config = config or TranslatorConfig()
        self._fetch = fetch or AiohttpFetcher(timeout=self.config.timeout)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def translate_text(self, text: str, target_lang: str, mode: ModeLike = None) -> str:
        """Translate a single string; returns ``text`` unchanged on any failure."""
        outcome = await self.translate_text_outcome(text, target_lang, mode)
        return outcome.value

    async def translate_batch(self, texts: Sequence[str], target_lang: str, mode: ModeLike = None) -> List[str]:
        """Translate an ordered list; the result always has ``len(texts)`` entries."""
        outcome = await self.translate_batch_outcome(texts, target_lang, mode)
        return outcome.value

    async def translate_image(
        self,
        image_data: Optional[str],
        target_lang: str,
        mode: ModeLike = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> ImageResult:
        """Extract and translate the text regions of an image."""
        outcome = await self.translate_image_outcome(image_data, target_lang, mode, width, height)
        return outcome.value

    async def translate_text_outcome(
        self, text: str, target_lang: str, mode: ModeLike = None
    ) -> TranslationOutcome[str]:
        model = None
        try:
            model = select_model(mode, False, self.config)
            if not is_model_allowed(model, self.config):
                return self._fallback("text", text, DisallowedModelError(model, self.config.allowed_models), model)

            response = await self._complete(build_text_request(text, target_lang, model))
            content = first_message_content(response)
            if isinstance(content, str) and content.strip():
                return TranslationOutcome.success(content, model=model)

            return self._fallback(
                "text", text,
                MalformedResponseError("Empty translation response", operation="text", content=content),
                model
            )
        except Exception as e:
            return self._fallback("text", text, _as_error(e), model)

    async def translate_batch_outcome(
        self, texts: Sequence[str], target_lang: str, mode: ModeLike = None
    ) -> TranslationOutcome[List[str]]:
        originals = list(texts)
        model = None
        try:
            model = select_model(mode, True, self.config)
            if not is_model_allowed(model, self.config):
                return self._fallback("batch", originals, DisallowedModelError(model, self.config.allowed_models), model)

            response = await self._complete(build_batch_request(originals, target_lang, model))
            content = first_message_content(response)
            if not content:
                return self._fallback(
                    "batch", originals,
                    MalformedResponseError("Empty translation response", operation="batch", content=content),
                    model
                )

            parsed = _parse_json_content(content, "batch")
            translations = parsed.get("translations") if isinstance(parsed, dict) else None
            if not isinstance(translations, list):
                translations = []

            if len(translations) != len(originals):
                return self._fallback(
                    "batch", originals,
                    MalformedResponseError(
                        f"Expected {len(originals)} translations, got {len(translations)}",
                        operation="batch",
                        content=content
                    ),
                    model
                )

            merged = [
                translated if isinstance(translated, str) and translated.strip() else original
                for translated, original in zip(translations, originals)
            ]
            return TranslationOutcome.success(merged, model=model)
        except Exception as e:
            return self._fallback("batch", originals, _as_error(e), model)

    async def translate_image_outcome(
        self,
        image_data: Optional[str],
        target_lang: str,
        mode: ModeLike = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> TranslationOutcome[ImageResult]:
        model = None
        try:
            model = select_model(mode, True, self.config)
            if not is_model_allowed(model, self.config):
                return self._fallback(
                    "image", fallback_image_result(width, height),
                    DisallowedModelError(model, self.config.allowed_models), model
                )

            response = await self._complete(build_image_request(image_data, target_lang, model))
            content = first_message_content(response)
            if not content:
                raise MalformedResponseError("Empty translation response", operation="image", content=content)

            parsed = _parse_json_content(content, "image")
            regions = parsed.get("translations") if isinstance(parsed, dict) else None
            if not isinstance(regions, list) or not regions:
                raise MalformedResponseError("Missing translations", operation="image", content=content)

            return TranslationOutcome.success(parsed, model=model)
        except Exception as e:
            return self._fallback("image", fallback_image_result(width, height), _as_error(e), model)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _complete(self, request: TranslationRequest) -> Dict[str, Any]:
        """Post the request, retrying once on any failure."""
        try:
            return await with_retry(
                lambda: self._call_chat_completion(request),
                attempts=CALL_ATTEMPTS,
                should_retry=always_retry,
            )
        except MangaTranError:
            raise
        except Exception as e:
            raise TransportError(
                f"{type(e).__name__}: {e}",
                url=self.config.chat_completions_url,
                original_error=e
            ) from e

    async def _call_chat_completion(self, request: TranslationRequest) -> Dict[str, Any]:
        """One attempt, cancelled once it runs past ``config.timeout``."""
        url = self.config.chat_completions_url
        logger.debug(f"POST {url} model={request.model} structured={request.structured}")
        try:
            return await asyncio.wait_for(self._fetch(url, request.to_payload()), timeout=self.config.timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Translation request timed out after {self.config.timeout}s",
                url=url,
                original_error=e,
                timeout=True
            ) from e

    @staticmethod
    def _fallback(operation: str, value, error: MangaTranError, model: Optional[str]) -> TranslationOutcome:
        logger.warning(f"{operation} translation fell back to default ({type(error).__name__}: {error.message})")
        logger.debug(f"{operation} fallback details: {error.details}")
        return TranslationOutcome.fallback(value, error=error, model=model)


@functools.lru_cache(maxsize=1)
def default_adapter() -> TranslationAdapter:
    """Adapter built from ``load_config()``; defaults are used if the config is unusable."""
    try:
        config = load_config()
    except (ConfigurationError, OSError) as e:
        logger.warning(f"Falling back to built-in translator config: {e}")
        config = TranslatorConfig()
    return TranslationAdapter(config)


async def translate_text(text: str, target_lang: str, mode: ModeLike = None) -> str:
    return await default_adapter().translate_text(text, target_lang, mode)


async def translate_batch(texts: Sequence[str], target_lang: str, mode: ModeLike = None) -> List[str]:
    return await default_adapter().translate_batch(texts, target_lang, mode)


async def translate_image(
    image_data: Optional[str],
    target_lang: str,
    mode: ModeLike = None,
    width: Optional[float] = None,
    height: Optional[float] = None,
) -> ImageResult:
    return await default_adapter().translate_image(image_data, target_lang, mode, width, height)
