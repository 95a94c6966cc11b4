# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `SpecStore`, the per-process cache of loaded root grammars.

The first request for `git` reads and validates the grammar; every later
request, and every command-slot delegation to `git`, reuses the same node tree.
Entries are never invalidated. Loads of one root are single-flight.
"""
from __future__ import annotations

import asyncio

from tern.exceptions import SpecFormatError, SpecLoadError
from tern.logger import logger
from tern.spec.catalog import Catalog
from tern.spec.model import SubcommandNode
from tern.spec.resolver import normalize


class SpecStore:
    """
    Caches root grammars loaded from a `Catalog`.

    Args:
        catalog (Catalog): The grammar catalog to load from.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self._loaded: dict[str, SubcommandNode] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def is_loaded(self, name: str) -> bool:
        return name in self._loaded

    async def load_root(self, name: str) -> SubcommandNode | None:
        """
        Return the grammar for root command `name`, loading it on first use.

        Returns:
            SubcommandNode | None: The root node, or None if the command is
            unknown or its grammar is broken.
        """
        if name in self._loaded:
            logger.debug("Loaded grammar found for '%s'.", name)
            return self._loaded[name]
        if name not in self.catalog:
            logger.debug("No grammar found for '%s'.", name)
            return None
        lock = self._locks.setdefault(name, asyncio.Lock())
        async with lock:
            if name in self._loaded:
                return self._loaded[name]
            try:
                node = normalize(await self.catalog.load(name))
            except (SpecLoadError, SpecFormatError) as error:
                logger.warning("Grammar for '%s' could not be loaded: %s", name, error)
                return None
            if node is None:
                return None
            self._loaded[name] = node
            return node
