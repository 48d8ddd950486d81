"""
UI Atoms - Basic building blocks.
"""

from .text import Text

__all__ = [
    'Text',
]
