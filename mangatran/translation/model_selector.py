"""Backend model selection from the caller's mode."""

from typing import Optional, Union

from mangatran.core.models import Mode
from mangatran.utils.config_loader import TranslatorConfig

_DEFAULT_CONFIG = TranslatorConfig()


def select_model(
    mode: Union[Mode, str, None],
    require_json: bool = False,
    config: Optional[TranslatorConfig] = None
) -> str:
    """
    Pick the backend model for a request.

    ``fast`` always wins; otherwise any request needing a JSON reply goes to
    the structured-output model, and everything else to the default model.

    Args:
        mode: Caller intent (fast/json/batch/default)
        require_json: Whether the operation parses a JSON reply
        config: Supplies the model identifiers for each tier

    Returns:
        Model identifier (not yet checked against the allow-list)
    """
    config = config or _DEFAULT_CONFIG
    mode = Mode.parse(mode)

    if mode is Mode.FAST:
        return config.fast_model
    if require_json or mode in (Mode.JSON, Mode.BATCH):
        return config.structured_model
    return config.default_model


def is_model_allowed(model: str, config: Optional[TranslatorConfig] = None) -> bool:
    """Check a model identifier against the allow-list."""
    config = config or _DEFAULT_CONFIG
    return model in config.allowed_models
