"""Configuration loading and management."""

import os
from dataclasses import dataclass, field, asdict, replace
from pathlib import Path
from typing import Dict, Any, FrozenSet, List, Optional

import yaml
from dotenv import load_dotenv

from mangatran.core.exceptions import ConfigurationError

DEFAULT_BASE_URL = "http://localhost:8000"
CHAT_COMPLETIONS_PATH = "/v1/chat/completions"

DEFAULT_ALLOWED_MODELS = frozenset({
    "gpt-5",
    "gpt-5.1",
    "gpt-5.2",
    "gpt-5.1-codex-max",
    "gpt-5.1-codex-mini",
    "codex-mini",
})


@dataclass(frozen=True)
class TranslatorConfig:
    """Immutable settings shared by every call an adapter makes."""
    base_url: str = DEFAULT_BASE_URL
    allowed_models: FrozenSet[str] = field(default_factory=lambda: DEFAULT_ALLOWED_MODELS)
    fast_model: str = "codex-mini"
    structured_model: str = "gpt-5.1-codex-max"
    default_model: str = "gpt-5.2"
    timeout: float = 30.0  # per attempt, seconds

    @property
    def chat_completions_url(self) -> str:
        return self.base_url.rstrip("/") + CHAT_COMPLETIONS_PATH

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the config is usable."""
        issues = []
        if not isinstance(self.base_url, str) or not self.base_url.startswith(("http://", "https://")):
            issues.append(f"base_url must be an http(s) URL, got {self.base_url!r}")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or not self.timeout > 0:
            issues.append(f"timeout must be positive, got {self.timeout!r}")
        for key in ("fast_model", "structured_model", "default_model"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value:
                issues.append(f"{key} must be a non-empty model identifier, got {value!r}")
        return issues

    def with_allowed_models(self, models) -> "TranslatorConfig":
        """Copy of this config with a different allow-list."""
        return replace(self, allowed_models=frozenset(models))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranslatorConfig":
        """
        Build a config from a mapping (e.g. the ``translator`` section of a YAML file).

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"translator config must be a mapping, got {type(data).__name__}",
                config_key="translator",
                invalid_value=data
            )

        known = set(cls.__dataclass_fields__)
        unknown = sorted(str(key) for key in set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                config_key=unknown[0],
                valid_values=sorted(known)
            )

        values = dict(data)
        if "allowed_models" in values:
            models = values["allowed_models"]
            if isinstance(models, str) or not isinstance(models, (list, tuple, set, frozenset)) \
                    or not all(isinstance(model, str) for model in models):
                raise ConfigurationError(
                    "allowed_models must be a list of model identifiers",
                    config_key="allowed_models",
                    invalid_value=models
                )
            values["allowed_models"] = frozenset(models)
        if "timeout" in values:
            try:
                values["timeout"] = float(values["timeout"])
            except (TypeError, ValueError, OverflowError):
                raise ConfigurationError(
                    "timeout must be a number of seconds",
                    config_key="timeout",
                    invalid_value=values["timeout"]
                )

        config = cls(**values)
        issues = config.validate()
        if issues:
            raise ConfigurationError(
                "; ".join(issues),
                config_key=issues[0].split(" ", 1)[0]
            )
        return config

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["allowed_models"] = sorted(self.allowed_models)
        return data


def load_config(config_path: Optional[str] = None) -> TranslatorConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file (defaults to configs/default.yaml)

    Returns:
        Validated TranslatorConfig
    """
    load_dotenv()

    if config_path is None:
        # Try to find default config
        possible_paths = [
            Path("configs/default.yaml"),
            Path(__file__).parent.parent.parent / "configs" / "default.yaml"
        ]

        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break
        else:
            return TranslatorConfig.from_dict(override_with_env(get_default_config()))

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Could not parse config file {config_path}: {e}",
            config_key="translator"
        ) from e

    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping, got {type(raw).__name__}",
            config_key="translator",
            invalid_value=raw
        )
    section = raw.get("translator") or {}
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"'translator' section must be a mapping, got {type(section).__name__}",
            config_key="translator",
            invalid_value=section
        )

    config = get_default_config()
    config.update(section)

    # Override with environment variables
    config = override_with_env(config)

    return TranslatorConfig.from_dict(config)


def save_config(config: TranslatorConfig, config_path: str) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration to write
        config_path: Output path
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        yaml.dump({"translator": config.to_dict()}, f, default_flow_style=False, sort_keys=False)


def override_with_env(config: Dict[str, Any]) -> Dict[str, Any]:
    """Override config with environment variables."""
    env_mappings = {
        "MANGATRAN_BASE_URL": "base_url",
        "MANGATRAN_TIMEOUT": "timeout",
    }

    for env_var, key in env_mappings.items():
        value = os.getenv(env_var)
        if value:
            config[key] = value

    return config


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return TranslatorConfig().to_dict()
