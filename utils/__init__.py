"""
Utilities package for RECOOK BOOK.

Contains configuration, logging, and id generation helpers.
"""

from .config import Config, get_config
from .logger import setup_logging, get_logger, log_event, log_operation
from .ids import ClockIdSource, CounterIdSource, system_now

__all__ = [
    'Config',
    'get_config',
    'setup_logging',
    'get_logger',
    'log_event',
    'log_operation',
    'ClockIdSource',
    'CounterIdSource',
    'system_now'
]
