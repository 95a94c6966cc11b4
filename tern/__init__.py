"""
Tern Completion Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .runtime import SuggestionEngine
from .shell import Shell
from .spec.catalog import Catalog
from .suggestion import Suggestion, SuggestionKind, SuggestionResult

logger = logging.getLogger("tern")


__all__ = [
    "Catalog",
    "Shell",
    "Suggestion",
    "SuggestionEngine",
    "SuggestionKind",
    "SuggestionResult",
]
