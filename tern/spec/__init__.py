"""
Tern Completion Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .catalog import Catalog, FileSpecSource, SpecSource, ValueSpecSource
from .model import (
    ArgumentSlot,
    Failed,
    GeneratorLoader,
    InlineLoader,
    LoaderKind,
    LocationKind,
    Option,
    ReferenceLoader,
    SpecFragment,
    SpecLocation,
    SubcommandNode,
    Unresolved,
)
from .persistence import filter_persistent_tokens, merge_persistent_options
from .resolver import CatalogLocationResolver, SpecResolver, normalize
from .schema import parse_spec, read_spec_file
from .store import SpecStore

__all__ = [
    "ArgumentSlot",
    "Catalog",
    "CatalogLocationResolver",
    "Failed",
    "FileSpecSource",
    "GeneratorLoader",
    "InlineLoader",
    "LoaderKind",
    "LocationKind",
    "Option",
    "ReferenceLoader",
    "SpecFragment",
    "SpecLocation",
    "SpecResolver",
    "SpecSource",
    "SpecStore",
    "SubcommandNode",
    "Unresolved",
    "ValueSpecSource",
    "filter_persistent_tokens",
    "merge_persistent_options",
    "normalize",
    "parse_spec",
    "read_spec_file",
]
