"""
Tern Completion Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .colors import OneColors, get_prompt_style, get_tern_theme

__all__ = [
    "OneColors",
    "get_prompt_style",
    "get_tern_theme",
]
