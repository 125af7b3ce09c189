"""
Core data models for the MangaTran client.

Every object here lives for the duration of a single translate call: the
request sent to the chat-completions endpoint, the regions recovered from an
image reply, and the success-or-fallback outcome handed back to callers.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar, Union

from mangatran.core.exceptions import MangaTranError

T = TypeVar("T")


class Mode(str, Enum):
    """Caller intent selecting which backend tier handles a request."""
    FAST = "fast"
    JSON = "json"
    BATCH = "batch"
    DEFAULT = "default"

    @classmethod
    def parse(cls, value: Union["Mode", str, None]) -> "Mode":
        """Coerce a caller-supplied mode; unknown or missing values mean DEFAULT."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.DEFAULT
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.DEFAULT


@dataclass(frozen=True)
class ChatMessage:
    """One role-tagged message of a chat-completions request."""
    role: str
    content: Union[str, Tuple[Dict[str, Any], ...]]

    def to_dict(self) -> Dict[str, Any]:
        content = self.content
        if isinstance(content, tuple):
            content = list(content)
        return {"role": self.role, "content": content}


@dataclass(frozen=True)
class TranslationRequest:
    """Chat-completions request for a single translate operation."""
    model: str
    messages: Tuple[ChatMessage, ...]
    response_format: Optional[Dict[str, str]] = None

    @property
    def structured(self) -> bool:
        """True when the reply is expected to be a JSON object."""
        return self.response_format is not None

    def to_payload(self) -> Dict[str, Any]:
        """Render the JSON body posted to the endpoint."""
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [message.to_dict() for message in self.messages],
        }
        if self.response_format is not None:
            payload["response_format"] = dict(self.response_format)
        return payload


@dataclass
class TextRegion:
    """A translated span of text inside an image."""
    translated_text: str
    original_language: str
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def unavailable(cls, width: Optional[float] = None, height: Optional[float] = None) -> TextRegion:
        """Placeholder region covering the whole image (200x200 when size is unknown)."""
        return cls(
            translated_text="Translation unavailable",
            original_language="Unknown",
            min_x=0,
            min_y=0,
            max_x=width or 200,
            max_y=height or 200,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used on the wire."""
        return {
            "originalLanguage": self.original_language,
            "translatedText": self.translated_text,
            "minX": self.min_x,
            "minY": self.min_y,
            "maxX": self.max_x,
            "maxY": self.max_y,
        }


def fallback_image_result(width: Optional[float] = None, height: Optional[float] = None) -> Dict[str, List[Dict[str, Any]]]:
    """Image result returned whenever a region extraction cannot be completed."""
    return {"translations": [TextRegion.unavailable(width, height).to_dict()]}


@dataclass
class TranslationOutcome(Generic[T]):
    """
    Result of a translate operation.

    ``value`` is always usable: either the normalized translation or the
    operation's fallback. ``fell_back`` and ``error`` say which one it is.
    """
    value: T
    fell_back: bool = False
    error: Optional[MangaTranError] = None
    model: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.fell_back

    @classmethod
    def success(cls, value: T, model: Optional[str] = None) -> TranslationOutcome[T]:
        return cls(value=value, model=model)

    @classmethod
    def fallback(
        cls,
        value: T,
        error: Optional[MangaTranError] = None,
        model: Optional[str] = None,
    ) -> TranslationOutcome[T]:
        return cls(value=value, fell_back=True, error=error, model=model)
