"""
Capability provider selection exceptions.
"""

from typing import Iterable, Optional

from .base import ForageError


def _capability_name(capability) -> str:
    return getattr(capability, "__name__", str(capability))


class ProviderError(ForageError):
    """Base exception for provider discovery and selection errors."""

    def __init__(self, message: str, capability=None, candidates: Iterable[str] = ()):
        self.capability = capability
        self.candidates = list(candidates)
        super().__init__(message)


class ProviderNotFoundError(ProviderError):
    """Raised when no provider, or no provider with the requested name, is registered."""

    def __init__(self, capability=None, candidates: Iterable[str] = (), name: Optional[str] = None):
        self.name = name
        candidates = list(candidates)
        message = f"No provider found for capability '{_capability_name(capability)}'"
        if name:
            message += f" with name '{name}'"
        if candidates:
            message += f". Available providers: {', '.join(candidates)}"
        super().__init__(message, capability, candidates)


class AmbiguousProviderError(ProviderError):
    """Raised when several providers match and no discriminator was given."""

    def __init__(self, capability=None, candidates: Iterable[str] = ()):
        candidates = list(candidates)
        message = (
            f"Expected exactly 1 provider for capability '{_capability_name(capability)}', "
            f"but found {len(candidates)}: {', '.join(candidates)}. "
            f"Configure which one to use"
        )
        super().__init__(message, capability, candidates)
