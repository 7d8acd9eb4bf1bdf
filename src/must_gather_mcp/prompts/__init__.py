"""Tool descriptions and usage text loaded from YAML."""

from .manager import PromptManager

__all__ = ["PromptManager"]
