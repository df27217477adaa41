"""
Utility helpers for the keyframe engine
"""

from .enum_helper import EnumHelper
from .logger import configure_logger, get_category_logger, get_logger

__all__ = [
    'EnumHelper',
    'configure_logger',
    'get_category_logger',
    'get_logger',
]
