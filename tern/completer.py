# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `TernCompleter`, a Prompt Toolkit completer backed by `SuggestionEngine`.

This completer supports:
- Root command completion from the grammar catalog
- Subcommand, option and argument completion from each command's grammar
- Path completion that replaces only the final path segment
- Longest common prefix (LCP) insertion when several candidates share a stem
- Quoting of candidates containing spaces

Completions are computed asynchronously; `get_completions()` is a blocking
convenience for callers outside an event loop.
"""
from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import AsyncGenerator, Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from tern.logger import logger
from tern.runtime import SuggestionEngine
from tern.shell import Shell
from tern.suggestion import Suggestion


class TernCompleter(Completer):
    """
    Prompt Toolkit completer for shell command lines.

    Each completion's `start_position` is `-characters_to_drop`, so accepting it
    overwrites exactly the part of the line the engine says is being replaced.

    Args:
        engine (SuggestionEngine): Engine computing suggestions.
        cwd (str | Path | None): Working directory; defaults to the process cwd.
        shell (Shell): Shell flavor used for path syntax.
    """

    def __init__(
        self,
        engine: SuggestionEngine,
        cwd: str | Path | None = None,
        shell: Shell = Shell.BASH,
    ):
        self.engine = engine
        self.cwd = cwd
        self.shell = shell

    async def get_completions_async(
        self, document: Document, complete_event: CompleteEvent
    ) -> AsyncGenerator[Completion, None]:
        """
        Compute completions for the text before the cursor.

        Args:
            document (Document): The current Prompt Toolkit document.
            complete_event: The triggering event; not used here.

        Yields:
            Completion: Completions for the token under the cursor.
        """
        text = document.text_before_cursor
        cwd = self.cwd if self.cwd is not None else os.getcwd()
        result = await self.engine.get_suggestions(text, cwd, self.shell)
        if result is None:
            return
        for completion in self._yield_lcp_completions(
            result.suggestions, result.characters_to_drop
        ):
            yield completion

    def get_completions(
        self, document: Document, complete_event: CompleteEvent | None
    ) -> Iterable[Completion]:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            logger.debug("get_completions called inside a running loop; skipping.")
            return

        async def collect() -> list[Completion]:
            return [
                completion
                async for completion in self.get_completions_async(
                    document, complete_event or CompleteEvent()
                )
            ]

        yield from asyncio.run(collect())

    def _ensure_quote(self, text: str) -> str:
        """
        Quote a candidate containing whitespace so it stays one word.

        Args:
            text (str): The candidate text.

        Returns:
            str: The text, double-quoted if it contains whitespace.
        """
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(
        self, suggestions: list[Suggestion], characters_to_drop: int
    ) -> Iterable[Completion]:
        """
        Yield completions using longest-common-prefix logic.

        Behavior:
        - If only one candidate → yield it fully.
        - If several candidates share a prefix longer than the typed stub, insert
          the prefix first, but also list every candidate.
        - Otherwise list every candidate.

        Args:
            suggestions (list[Suggestion]): Ranked candidates.
            characters_to_drop (int): Typed characters each candidate replaces.

        Yields:
            Completion: Completion objects for the Prompt Toolkit menu.
        """
        if not suggestions:
            return
        start_position = -characters_to_drop
        inserts = [suggestion.insert for suggestion in suggestions]
        lcp = os.path.commonprefix(inserts)

        if (
            len(suggestions) > 1
            and len(lcp) > characters_to_drop
            and not lcp.startswith("-")
        ):
            yield Completion(lcp, start_position=start_position, display=lcp)
        for suggestion in suggestions:
            yield Completion(
                self._ensure_quote(suggestion.insert),
                start_position=start_position,
                display=suggestion.display,
                display_meta=suggestion.description or str(suggestion.kind),
                style=f"class:tern.{suggestion.kind}",
            )
