"""Utility modules for the JSON file tree converter."""

from .naming import generate_unique_filename, sanitize_filename
from .size_calculator import SizeCalculator
from .validation import NonStandardConstantError, ValidationUtils, load_json

__all__ = [
    "NonStandardConstantError",
    "SizeCalculator",
    "ValidationUtils",
    "generate_unique_filename",
    "load_json",
    "sanitize_filename",
]
