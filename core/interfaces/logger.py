"""
Logging port.

Use cases receive an ILogger instead of reaching for a global logger, so
they can be exercised in tests with a recording implementation.
"""
from abc import ABC, abstractmethod
from typing import Any, Iterable

from core.domain.diagnostics import DiagnosticEvent


class ILogger(ABC):
    """Interface for structured event logging."""

    @abstractmethod
    def debug(self, event: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def info(self, event: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, event: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def error(self, event: str, **kwargs: Any) -> None:
        pass

    def emit(self, events: Iterable[DiagnosticEvent]) -> None:
        """Forward diagnostic events produced by pure algorithms."""
        for diagnostic in events:
            log_method = getattr(self, diagnostic.level, self.info)
            log_method(diagnostic.event, **diagnostic.fields)
