"""
Provider configuration models.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .base import BaseModel


class ProviderFamily(Enum):
    """Backend families sharing one invocation contract."""
    LOCAL = "chrome"
    OPENAI = "openai"
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"

    @property
    def is_remote(self) -> bool:
        return self is not ProviderFamily.LOCAL

    @property
    def label(self) -> str:
        return {
            "chrome": "On-device",
            "openai": "OpenAI",
            "gemini": "Gemini",
            "anthropic": "Anthropic",
        }[self.value]


@dataclass(frozen=True)
class ModelConfig(BaseModel):
    """Immutable descriptor of a user-selectable model."""
    model_id: str
    family: ProviderFamily
    wire_model_id: Optional[str]
    display_name: str
    unit_cost: float = 0.0


@dataclass(frozen=True)
class LanguageDecision(BaseModel):
    """Outcome of checking a family's support for the requested language."""
    supported: bool
    effective_language: str
    needs_fallback: bool
