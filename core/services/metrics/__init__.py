"""
Metrics and structured logging services.
"""
from .dashboard_metrics import (
    DashboardMetrics,
    StatusClassifier,
    calculate_metrics
)
from .logger import StructuredLogger, StructuredFormatter, KeyValueFormatter

__all__ = [
    'DashboardMetrics',
    'StatusClassifier',
    'calculate_metrics',
    'StructuredLogger',
    'StructuredFormatter',
    'KeyValueFormatter'
]
