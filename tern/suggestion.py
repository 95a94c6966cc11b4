# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Suggestion model and the default recommendation builder.

The matcher stops at a `SuggestionContext`: the node it reached, the options in
scope, the argument slots still open, and the token being typed. The
`RecommendationBuilder` turns that context into ranked `Suggestion`s:

- Subcommand-driven contexts offer child commands, unused options, and values
  for the node's first argument slot.
- Argument-driven contexts offer values for the active slot, plus children and
  options when the slot may be skipped (optional, or a variadic slot that
  already holds a value).

Slot values come from static `suggestions`, the `filepaths`/`folders`
templates (a directory listing), or, for command slots, the catalog's root
command names. Candidates are prefix-filtered on the in-progress text, which
for a path token is only its final segment.
"""
from __future__ import annotations

import asyncio
import os
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Sequence

from tern.shell import Shell
from tern.spec.model import ArgumentSlot, Option, SubcommandNode
from tern.tokens import CommandToken

DEFAULT_PRIORITY = 50


class SuggestionKind(Enum):
    """What kind of syntactic element a suggestion inserts."""

    SUBCOMMAND = "subcommand"
    OPTION = "option"
    ARGUMENT = "argument"
    PATH = "path"

    def __str__(self) -> str:
        return self.value


KIND_ORDER = {
    SuggestionKind.SUBCOMMAND: 0,
    SuggestionKind.ARGUMENT: 1,
    SuggestionKind.PATH: 2,
    SuggestionKind.OPTION: 3,
}


class ContextKind(Enum):
    """Which matcher step produced a context."""

    SUBCOMMAND = "subcommand"
    ARGUMENT = "argument"


@dataclass(frozen=True)
class Suggestion:
    """One completion candidate."""

    display: str
    insert: str
    kind: SuggestionKind
    priority: int = DEFAULT_PRIORITY
    description: str = ""

    def as_dict(self) -> dict[str, Any]:
        return {**asdict(self), "kind": self.kind.value}


@dataclass
class SuggestionContext:
    """
    Everything the recommendation builder needs at the point matching stopped.

    Attributes:
        kind (ContextKind): Subcommand-driven or argument-driven.
        node (SubcommandNode): The command being completed.
        options (list[Option]): Inherited persistent options plus the node's own.
        argument_slots (list[ArgumentSlot]): Slots still open; the first is active.
        partial_token (CommandToken | None): The token being typed, if any.
        accepted_tokens (list[CommandToken]): Tokens consumed in this scope.
        cwd (Path): Directory to list paths from.
        shell (Shell): Shell flavor, for path syntax.
        arguments_exhausted (bool): All argument slots have been filled.
        arguments_consumed_any (bool): Positional arguments were consumed.
        from_variadic (bool): The active variadic slot already holds a value.
    """

    kind: ContextKind
    node: SubcommandNode
    options: list[Option]
    argument_slots: list[ArgumentSlot]
    partial_token: CommandToken | None
    accepted_tokens: list[CommandToken]
    cwd: Path
    shell: Shell = Shell.BASH
    arguments_exhausted: bool = False
    arguments_consumed_any: bool = False
    from_variadic: bool = False

    @property
    def active_slot(self) -> ArgumentSlot | None:
        return self.argument_slots[0] if self.argument_slots else None

    @property
    def prefix(self) -> str:
        """Text candidates must start with."""
        token = self.partial_token
        if token is None:
            return ""
        if token.is_path:
            return "" if token.is_path_complete else self.shell.base_name(token.text)
        return token.text


@dataclass
class SuggestionResult:
    """Ranked suggestions and how many typed characters a choice replaces."""

    suggestions: list[Suggestion] = field(default_factory=list)
    characters_to_drop: int = 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "suggestions": [suggestion.as_dict() for suggestion in self.suggestions],
            "characters_to_drop": self.characters_to_drop,
        }


def _list_directory(
    directory: Path, folders_only: bool, show_hidden: bool
) -> list[tuple[str, bool]]:
    entries: list[tuple[str, bool]] = []
    try:
        with os.scandir(directory) as scan:
            for entry in scan:
                if entry.name.startswith(".") and not show_hidden:
                    continue
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    continue
                if folders_only and not is_dir:
                    continue
                entries.append((entry.name, is_dir))
    except OSError:
        return []
    return entries


class RecommendationBuilder:
    """
    Builds ranked suggestions from a `SuggestionContext`.

    Args:
        root_names (Sequence[str]): Command names offered for command slots.
    """

    def __init__(self, root_names: Sequence[str] = ()):
        self.root_names = tuple(root_names)

    async def build(self, context: SuggestionContext) -> list[Suggestion]:
        if context.kind is ContextKind.SUBCOMMAND:
            suggestions = await self._subcommand_driven(context)
        else:
            suggestions = await self._argument_driven(context)
        return self.rank(suggestions, context.prefix)

    async def _subcommand_driven(self, context: SuggestionContext) -> list[Suggestion]:
        if context.arguments_exhausted and context.arguments_consumed_any:
            return []
        suggestions: list[Suggestion] = []
        if not context.arguments_consumed_any:
            suggestions.extend(self.child_suggestions(context.node))
            suggestions.extend(
                self.option_suggestions(context.options, context.accepted_tokens)
            )
        if context.node.argument_slots:
            suggestions.extend(
                await self.slot_suggestions(context.node.argument_slots[0], context)
            )
        return suggestions

    async def _argument_driven(self, context: SuggestionContext) -> list[Suggestion]:
        slot = context.active_slot
        if slot is None:
            return []
        suggestions = await self.slot_suggestions(slot, context)
        if slot.is_optional or (slot.is_variadic and context.from_variadic):
            suggestions.extend(self.child_suggestions(context.node))
            suggestions.extend(
                self.option_suggestions(context.options, context.accepted_tokens)
            )
        return suggestions

    def child_suggestions(self, node: SubcommandNode) -> list[Suggestion]:
        return [
            Suggestion(name, name, SuggestionKind.SUBCOMMAND, description=child.description)
            for child in node.children
            for name in child.names
        ]

    def option_suggestions(
        self, options: Iterable[Option], accepted_tokens: Iterable[CommandToken]
    ) -> list[Suggestion]:
        used = {token.text for token in accepted_tokens}
        return [
            Suggestion(name, name, SuggestionKind.OPTION, description=option.description)
            for option in options
            if used.isdisjoint(option.names)
            for name in option.names
        ]

    async def slot_suggestions(
        self, slot: ArgumentSlot, context: SuggestionContext
    ) -> list[Suggestion]:
        suggestions = [
            Suggestion(value, value, SuggestionKind.ARGUMENT, description=slot.description)
            for value in slot.suggestions
        ]
        if slot.is_command:
            suggestions.extend(
                Suggestion(name, name, SuggestionKind.SUBCOMMAND)
                for name in self.root_names
            )
        if slot.template in ("filepaths", "folders"):
            suggestions.extend(
                await self.path_suggestions(
                    context, folders_only=slot.template == "folders"
                )
            )
        return suggestions

    async def path_suggestions(
        self, context: SuggestionContext, folders_only: bool = False
    ) -> list[Suggestion]:
        show_hidden = context.prefix.startswith(".")
        entries = await asyncio.to_thread(
            _list_directory, context.cwd, folders_only, show_hidden
        )
        separator = context.shell.path_separator
        return [
            Suggestion(
                f"{name}{separator}" if is_dir else name,
                f"{name}{separator}" if is_dir else name,
                SuggestionKind.PATH,
                description="folder" if is_dir else "file",
            )
            for name, is_dir in entries
        ]

    def rank(self, suggestions: Iterable[Suggestion], prefix: str) -> list[Suggestion]:
        """Prefix-filter, deduplicate by insertion text, and order suggestions."""
        seen: set[str] = set()
        matches: list[Suggestion] = []
        for suggestion in suggestions:
            if not suggestion.insert.startswith(prefix) or suggestion.insert in seen:
                continue
            seen.add(suggestion.insert)
            matches.append(suggestion)
        return sorted(
            matches,
            key=lambda s: (-s.priority, KIND_ORDER[s.kind], s.display),
        )
