"""
Export and validation command implementations.

Commands:
    - ExportCommand: Export a repository snapshot to TTL
    - ValidateCommand: Check an exported TTL file
"""

from .export import ExportCommand
from .validate import ValidateCommand

__all__ = [
    'ExportCommand',
    'ValidateCommand',
]
