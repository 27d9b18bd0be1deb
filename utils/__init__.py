"""
utils/__init__.py
Export commonly used utility functions
"""

from utils.fault_formatter import format_fault_line, format_faults_message
from utils.i18n import t
from utils.logger import get_logger, setup_logging
from utils.parsers import parse_language_callback, truck_query_candidates

__all__ = [
    "get_logger",
    "setup_logging",
    "format_faults_message",
    "format_fault_line",
    "truck_query_candidates",
    "parse_language_callback",
    "t",
]
