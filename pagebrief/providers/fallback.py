"""
Fallback ordering between provider families.
"""

from typing import Dict, List, Optional

from ..models.provider import ProviderFamily
from .registry import ProviderRegistry

# Hand-ordered alternatives per failed family; never lists the family itself
FALLBACK_ORDER: Dict[ProviderFamily, List[str]] = {
    ProviderFamily.LOCAL: ["gpt-3.5-turbo", "gemini-2.0-flash-exp", "claude-3-haiku"],
    ProviderFamily.OPENAI: ["gemini-2.0-flash-exp", "claude-3-haiku", "chrome-builtin"],
    ProviderFamily.GEMINI: ["gpt-3.5-turbo", "claude-3-haiku", "chrome-builtin"],
    ProviderFamily.ANTHROPIC: ["gpt-3.5-turbo", "gemini-2.0-flash-exp", "chrome-builtin"],
}


class FallbackPlanner:
    """Plans the ordered fallback candidates for a failed primary model."""

    def __init__(self,
                 registry: Optional[ProviderRegistry] = None,
                 order: Optional[Dict[ProviderFamily, List[str]]] = None):
        self.registry = registry or ProviderRegistry()
        self.order = order if order is not None else FALLBACK_ORDER

    def plan_fallbacks(self, primary_model_id: str, local_supported: bool) -> List[str]:
        """Candidates to try after primary_model_id failed.

        Args:
            primary_model_id: The model that failed
            local_supported: Whether the on-device runtime is usable

        Returns:
            Ordered model ids; empty for an unknown primary
        """
        primary = self.registry.lookup(primary_model_id)
        if primary is None:
            return []

        candidates = []
        for model_id in self.order.get(primary.family, []):
            config = self.registry.lookup(model_id)
            if config is None or config.family is primary.family:
                continue
            if config.family is ProviderFamily.LOCAL and not local_supported:
                continue
            candidates.append(model_id)
        return candidates
