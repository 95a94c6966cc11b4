# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `SuggestionEngine`, the entry point for computing completions.

A request goes through these steps:

1. Tokenize the text before the cursor. Trailing whitespace adds an empty
   in-progress token meaning "ready for the next word".
2. Load the grammar of the root command (cached for the life of the engine).
   While the root word itself is still being typed there is nothing to load.
3. With a grammar: mark the in-progress token as a path if it looks like one,
   walk the remaining tokens with the `Matcher`, and for paths replace only the
   final path segment.
4. Without one: after trailing whitespace fall back to plain path completion;
   otherwise complete the root word against every known command name.

`characters_to_drop` tells the caller how many typed characters the chosen
suggestion overwrites: the whole in-progress token, or just its last path
segment, or nothing when the cursor sits after whitespace or a separator.

Example:
    engine = SuggestionEngine(Catalog.bundled())
    result = await engine.get_suggestions("git che", cwd=".", shell=Shell.BASH)
    # result.characters_to_drop == 3
"""
from __future__ import annotations

from pathlib import Path

from tern.logger import logger
from tern.matcher import Matcher
from tern.paths import resolve_cwd
from tern.probe import ShellProbe
from tern.shell import Shell
from tern.spec.catalog import Catalog
from tern.spec.model import ArgumentSlot, ReferenceLoader, SubcommandNode, Unresolved
from tern.spec.resolver import LocationResolver, SpecResolver
from tern.spec.store import SpecStore
from tern.suggestion import RecommendationBuilder, SuggestionContext, SuggestionResult
from tern.tokens import CommandToken, parse_command


def filepaths_node() -> SubcommandNode:
    """Grammar accepting any number of file paths."""
    return SubcommandNode(
        names=("filepaths",),
        argument_slots=[
            ArgumentSlot(name="filepaths", is_variadic=True, template="filepaths")
        ],
    )


def root_commands_node(catalog: Catalog) -> SubcommandNode:
    """Grammar whose children are every root command of `catalog`."""
    return SubcommandNode(
        names=("root",),
        children=[
            SubcommandNode(names=(name,), definition=Unresolved(ReferenceLoader(name)))
            for name in catalog.root_names
        ],
    )


class SuggestionEngine:
    """
    Computes completion suggestions for command-line text.

    The engine owns the root-grammar cache and the resolver whose in-place
    resolution of deferred nodes is shared by every request it serves.

    Args:
        catalog (Catalog): Known command grammars.
        shell_probe (ShellProbe | None): Probe handed to grammar generators.
        location_resolver (LocationResolver | None): Loader for spec locations.
        builder (RecommendationBuilder | None): Turns contexts into suggestions.
    """

    def __init__(
        self,
        catalog: Catalog,
        shell_probe: ShellProbe | None = None,
        location_resolver: LocationResolver | None = None,
        builder: RecommendationBuilder | None = None,
    ):
        self.catalog = catalog
        self.store = SpecStore(catalog)
        self.resolver = SpecResolver(catalog, shell_probe, location_resolver)
        self.builder = builder or RecommendationBuilder(catalog.root_names)
        self.root_node = root_commands_node(catalog)

    def _matcher(self, cwd: Path, shell: Shell) -> Matcher:
        return Matcher(self.resolver, self.store, cwd, shell)

    async def get_suggestions(
        self, raw_input: str, cwd: str | Path, shell: Shell | str = Shell.BASH
    ) -> SuggestionResult | None:
        """
        Compute suggestions for `raw_input`.

        Args:
            raw_input (str): Command-line text before the cursor.
            cwd (str | Path): The shell's working directory.
            shell (Shell | str): Shell flavor.

        Returns:
            SuggestionResult | None: Ranked suggestions and `characters_to_drop`,
            or None if nothing can be suggested.
        """
        shell = Shell(shell)
        cwd = Path(cwd)
        tokens = parse_command(raw_input, shell.escape_char)
        if not tokens:
            return None
        ends_in_whitespace = tokens[-1].complete
        if ends_in_whitespace:
            tokens.append(CommandToken.placeholder())

        last = tokens[-1]
        characters_to_drop = 0 if last.complete else len(last.raw)
        context: SuggestionContext | None

        root_token = tokens[0]
        root = await self.store.load_root(root_token.text) if root_token.complete else None
        if root is not None:
            resolved = await resolve_cwd(last, cwd, shell)
            if resolved.is_path:
                last.is_path = True
                last.is_path_complete = resolved.is_path_complete
            context = await self._matcher(resolved.cwd, shell).match_subcommand(
                tokens[1:], root
            )
            if resolved.is_path:
                characters_to_drop = (
                    0 if resolved.is_path_complete else len(shell.base_name(last.raw))
                )
                logger.debug("Path token, charactersToDrop=%d.", characters_to_drop)
        elif ends_in_whitespace:
            logger.debug("No grammar for '%s'; completing file paths.", root_token.text)
            context = await self._matcher(cwd, shell).match_subcommand(
                tokens, filepaths_node()
            )
        else:
            logger.debug("Completing root command names for '%s'.", root_token.text)
            context = await self._matcher(cwd, shell).match_subcommand(
                tokens, self.root_node
            )

        if context is None:
            logger.debug("No suggestion context for %r.", raw_input)
            return None
        suggestions = await self.builder.build(context)
        return SuggestionResult(suggestions, characters_to_drop)
