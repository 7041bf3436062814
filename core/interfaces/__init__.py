"""
Interfaces for dependency inversion following SOLID principles.

External dependencies should depend on these abstractions, not concrete implementations.
"""
from .tracker_client import ITrackerClient
from .repository import IProjectRepository
from .logger import ILogger

__all__ = [
    'ITrackerClient',
    'IProjectRepository',
    'ILogger',
]
