"""Model selection, request building, transport and the translation adapter."""

from .adapter import TranslationAdapter
from .model_selector import select_model, is_model_allowed
from .transport import AiohttpFetcher

__all__ = [
    'TranslationAdapter',
    'select_model',
    'is_model_allowed',
    'AiohttpFetcher'
]
