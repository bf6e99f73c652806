"""
Centralized validation utilities for the ECSchema Turtle Exporter.

Module Structure:
- input.py: InputValidator - file path, output path and namespace IRI validation

Usage:
    from core.validators import InputValidator
"""

from .input import InputValidator

__all__ = [
    'InputValidator',
]
