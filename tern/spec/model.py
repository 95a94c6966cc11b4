# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Grammar data model for Tern.

A grammar is a tree of `SubcommandNode`s. Each node lists its child commands,
its options and its positional `ArgumentSlot`s. A node may be deferred: its
`definition` is then `Unresolved(loader)` and the real fields are filled in the
first time the matcher walks into it. Loaders come in three tagged kinds:

- `InlineLoader`: a `SpecFragment` carried in the tree itself.
- `ReferenceLoader`: a catalog key whose grammar is loaded on demand.
- `GeneratorLoader`: a callable receiving the typed command text and a shell
  probe, returning a `SpecFragment`, a `SpecLocation`, or a list of locations.

Resolution merges the loaded fragment into the node in place and flips its
definition to `RESOLVED`, so the tree itself acts as the resolution cache. A
loader that yields nothing flips it to `Failed` instead, and the node is then
skipped without running the loader again.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Awaitable, Callable, ClassVar, Sequence, Union

if TYPE_CHECKING:
    from tern.probe import ShellProbe


def _as_names(names: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(names, str):
        return (names,)
    return tuple(names)


class LoaderKind(Enum):
    """Tag of a deferred loader."""

    INLINE = "inline"
    REFERENCE = "reference"
    GENERATOR = "generator"

    def __str__(self) -> str:
        return self.value


class LocationKind(Enum):
    """Where an externally located grammar lives."""

    GLOBAL = "global"
    LOCAL = "local"

    def __str__(self) -> str:
        return self.value


@dataclass
class ArgumentSlot:
    """
    A positional argument position.

    Attributes:
        name (str): Display name of the argument.
        is_variadic (bool): Consumes any number of consecutive tokens.
        is_optional (bool): May be left empty.
        is_command (bool): Its value names another command whose own grammar
            takes over the rest of the line (`sudo`, `time`, `xargs`).
        template (str | None): `filepaths` or `folders` to suggest paths.
        suggestions (list[str]): Static values to suggest.
        description (str): Help text shown next to suggestions.
    """

    name: str = ""
    is_variadic: bool = False
    is_optional: bool = False
    is_command: bool = False
    template: str | None = None
    suggestions: list[str] = field(default_factory=list)
    description: str = ""


@dataclass(eq=False)
class Option:
    """A flag with one or more aliases and optional arguments of its own."""

    names: tuple[str, ...]
    argument_slots: list[ArgumentSlot] = field(default_factory=list)
    is_persistent: bool = False
    description: str = ""

    def __post_init__(self):
        self.names = _as_names(self.names)

    @property
    def name(self) -> str:
        return self.names[0] if self.names else ""

    def matches(self, name: str) -> bool:
        return name in self.names


@dataclass
class SpecFragment:
    """Partial node fields; `None` leaves the target node's field untouched."""

    children: list[SubcommandNode] | None = None
    options: list[Option] | None = None
    argument_slots: list[ArgumentSlot] | None = None
    description: str | None = None


@dataclass(frozen=True)
class SpecLocation:
    """Pointer to a grammar stored outside the tree."""

    kind: LocationKind
    name: str
    path: str | None = None


GeneratedSpec = Union[SpecFragment, SpecLocation, list[SpecLocation]]
SpecGenerator = Callable[
    [str, "ShellProbe"], Union[GeneratedSpec, Awaitable[GeneratedSpec]]
]


@dataclass(frozen=True)
class InlineLoader:
    fragment: SpecFragment
    kind: ClassVar[LoaderKind] = LoaderKind.INLINE


@dataclass(frozen=True)
class ReferenceLoader:
    key: str
    kind: ClassVar[LoaderKind] = LoaderKind.REFERENCE


@dataclass(frozen=True)
class GeneratorLoader:
    """
    Runs a generator. Grammar files name it by dotted `path`, imported on first
    resolution; Python callers may pass the callable as `generate`.
    """

    generate: SpecGenerator | None = None
    path: str | None = None
    kind: ClassVar[LoaderKind] = LoaderKind.GENERATOR

    @classmethod
    def from_path(cls, dotted_path: str) -> GeneratorLoader:
        return cls(path=dotted_path)


Loader = Union[InlineLoader, ReferenceLoader, GeneratorLoader]


@dataclass(frozen=True)
class Resolved:
    is_resolved: ClassVar[bool] = True


@dataclass(frozen=True)
class Unresolved:
    loader: Loader
    is_resolved: ClassVar[bool] = False


@dataclass(frozen=True)
class Failed:
    """A deferred node whose loader ran and produced nothing."""

    loader: Loader
    is_resolved: ClassVar[bool] = False


RESOLVED = Resolved()
Definition = Union[Resolved, Unresolved, Failed]


@dataclass(eq=False)
class SubcommandNode:
    """
    One command or subcommand in a grammar tree.

    Nodes compare by identity: the same node object is shared by every request
    that walks through it, which is what makes in-place resolution a cache.
    """

    names: tuple[str, ...]
    children: list[SubcommandNode] = field(default_factory=list)
    options: list[Option] = field(default_factory=list)
    argument_slots: list[ArgumentSlot] = field(default_factory=list)
    description: str = ""
    definition: Definition = RESOLVED

    def __post_init__(self):
        self.names = _as_names(self.names)

    @property
    def name(self) -> str:
        return self.names[0] if self.names else ""

    @property
    def is_resolved(self) -> bool:
        return self.definition.is_resolved

    @property
    def is_failed(self) -> bool:
        return isinstance(self.definition, Failed)

    def matches(self, name: str) -> bool:
        return name in self.names

    def find_child(self, name: str) -> SubcommandNode | None:
        """First child whose aliases contain `name` exactly."""
        return next((child for child in self.children if child.matches(name)), None)

    def as_fragment(self) -> SpecFragment:
        return SpecFragment(
            children=self.children,
            options=self.options,
            argument_slots=self.argument_slots,
            description=self.description or None,
        )

    def absorb(self, fragment: SpecFragment) -> None:
        """Merge `fragment` into this node and mark it resolved."""
        if fragment.children is not None:
            self.children = list(fragment.children)
        if fragment.options is not None:
            self.options = list(fragment.options)
        if fragment.argument_slots is not None:
            self.argument_slots = list(fragment.argument_slots)
        if fragment.description is not None:
            self.description = fragment.description
        self.definition = RESOLVED

    def mark_failed(self) -> None:
        """Record that this node's loader yielded nothing; it is not run again."""
        if isinstance(self.definition, Unresolved):
            self.definition = Failed(self.definition.loader)


SpecValue = Union[SubcommandNode, Callable[[], SubcommandNode]]
