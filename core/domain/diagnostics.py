"""
Diagnostic events returned by pure algorithms instead of logging directly.
"""
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class DiagnosticEvent:
    """A single structured diagnostic produced by a core algorithm."""
    level: str  # 'debug', 'info', 'warning', 'error'
    event: str
    fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def debug(cls, event: str, **fields: Any) -> 'DiagnosticEvent':
        return cls(level='debug', event=event, fields=fields)

    @classmethod
    def info(cls, event: str, **fields: Any) -> 'DiagnosticEvent':
        return cls(level='info', event=event, fields=fields)

    @classmethod
    def warning(cls, event: str, **fields: Any) -> 'DiagnosticEvent':
        return cls(level='warning', event=event, fields=fields)

    @classmethod
    def error(cls, event: str, **fields: Any) -> 'DiagnosticEvent':
        return cls(level='error', event=event, fields=fields)
