"""
Utility modules for file handling, validation, logging and currency display.
"""

from .currency import format_cents, dollars_to_cents, cents_to_dollars
from .file_handler import FileHandler
from .validator import DataValidator
from .logger import setup_logger

__all__ = ['FileHandler', 'DataValidator', 'setup_logger',
           'format_cents', 'dollars_to_cents', 'cents_to_dollars']
