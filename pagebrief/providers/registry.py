"""
Static registry of user-selectable models.
"""

from typing import Dict, List, Optional

from ..models.provider import ModelConfig, ProviderFamily


def _config(model_id: str, family: ProviderFamily, wire_model_id: Optional[str],
            display_name: str, unit_cost: float) -> ModelConfig:
    return ModelConfig(
        model_id=model_id,
        family=family,
        wire_model_id=wire_model_id,
        display_name=display_name,
        unit_cost=unit_cost,
    )


MODEL_CONFIGS: Dict[str, ModelConfig] = {
    config.model_id: config for config in [
        _config("chrome-builtin", ProviderFamily.LOCAL, None, "Chrome Built-in AI", 0),
        _config("gpt-3.5-turbo", ProviderFamily.OPENAI, "gpt-3.5-turbo", "GPT-3.5 Turbo", 0.002),
        _config("gpt-4", ProviderFamily.OPENAI, "gpt-4", "GPT-4", 0.03),
        _config("gpt-4-turbo", ProviderFamily.OPENAI, "gpt-4-turbo", "GPT-4 Turbo", 0.01),
        _config("gpt-4o", ProviderFamily.OPENAI, "gpt-4o", "GPT-4o", 0.005),
        _config("gpt-5", ProviderFamily.OPENAI, "gpt-5", "GPT-5", 0.00125),
        _config("gpt-5-mini", ProviderFamily.OPENAI, "gpt-5-mini", "GPT-5 Mini", 0.00025),
        _config("gpt-5-nano", ProviderFamily.OPENAI, "gpt-5-nano", "GPT-5 Nano", 0.00005),
        _config("gemini-2.5-pro", ProviderFamily.GEMINI, "gemini-2.5-pro", "Gemini 2.5 Pro", 0.00125),
        _config("gemini-2.5-flash", ProviderFamily.GEMINI, "gemini-2.5-flash", "Gemini 2.5 Flash", 0.00003),
        _config("gemini-2.0-flash-exp", ProviderFamily.GEMINI, "gemini-2.0-flash-exp",
                "Gemini 2.0 Flash (Exp)", 0),
        _config("claude-3-haiku", ProviderFamily.ANTHROPIC, "claude-3-haiku-20240307",
                "Claude 3 Haiku", 0.00025),
        _config("claude-3-sonnet", ProviderFamily.ANTHROPIC, "claude-3-sonnet-20240229",
                "Claude 3 Sonnet", 0.003),
        _config("claude-3-opus", ProviderFamily.ANTHROPIC, "claude-3-opus-20240229",
                "Claude 3 Opus", 0.015),
        _config("claude-3.5-sonnet", ProviderFamily.ANTHROPIC, "claude-3-5-sonnet-20240620",
                "Claude 3.5 Sonnet", 0.003),
        _config("claude-sonnet-4.5", ProviderFamily.ANTHROPIC, "claude-sonnet-4.5",
                "Claude Sonnet 4.5", 0.003),
        _config("claude-haiku-4.5", ProviderFamily.ANTHROPIC, "claude-haiku-4.5",
                "Claude Haiku 4.5", 0.001),
    ]
}

# Representative model per family, used when another family falls back to it
FAMILY_DEFAULTS: Dict[ProviderFamily, str] = {
    ProviderFamily.LOCAL: "chrome-builtin",
    ProviderFamily.OPENAI: "gpt-3.5-turbo",
    ProviderFamily.GEMINI: "gemini-2.0-flash-exp",
    ProviderFamily.ANTHROPIC: "claude-3-haiku",
}


class ProviderRegistry:
    """Read-only lookup of model configurations."""

    def __init__(self, configs: Optional[Dict[str, ModelConfig]] = None):
        self._configs = configs if configs is not None else MODEL_CONFIGS

    def lookup(self, model_id: Optional[str]) -> Optional[ModelConfig]:
        """Return the config for model_id, or None for an unknown model."""
        if not model_id:
            return None
        return self._configs.get(model_id)

    def list_models(self, family: Optional[ProviderFamily] = None) -> List[ModelConfig]:
        """All configs in table order, optionally restricted to one family."""
        return [
            config for config in self._configs.values()
            if family is None or config.family is family
        ]

    def default_model_for(self, family: ProviderFamily) -> str:
        return FAMILY_DEFAULTS[family]

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._configs

    def __len__(self) -> int:
        return len(self._configs)
