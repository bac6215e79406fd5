"""OpenRouter document model client."""

from .config import ModelSettings
from .openrouter import ModelRequestError, OpenRouterDocumentModel

__all__ = ["ModelRequestError", "ModelSettings", "OpenRouterDocumentModel"]
