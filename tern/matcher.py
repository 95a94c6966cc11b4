# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The grammar matcher: walks typed tokens down a grammar tree.

Each complete token is consumed as exactly one of:

- an option of the current command (its own or inherited as persistent),
- the name of a child command, which the matcher then descends into,
- a value for the next positional argument slot.

Matching stops with a `SuggestionContext` when the tokens run out or the token
under the cursor is reached, and stops with None when a complete token cannot
be consumed (an unknown flag, or a stray word where no argument is accepted).
It never backtracks: the first branch chosen for a token is final.

Context rules at a child-command boundary:
- persistent options declared on the way down stay in scope,
- only accepted tokens flagged persistent stay in the history,
- argument bookkeeping starts over.

Command slots (`sudo <command>`) hand the rest of the line to a fresh walk
rooted at the named command's own grammar.
"""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

from tern.exceptions import InvalidMatcherStateError
from tern.logger import logger
from tern.shell import Shell
from tern.spec.model import ArgumentSlot, Option, SubcommandNode
from tern.spec.persistence import (
    filter_persistent_tokens,
    find_option,
    merge_persistent_options,
)
from tern.spec.resolver import SpecResolver
from tern.spec.store import SpecStore
from tern.suggestion import ContextKind, SuggestionContext
from tern.tokens import CommandToken


class Matcher:
    """
    Recursive descent over a grammar tree for one suggestion request.

    Args:
        resolver (SpecResolver): Resolves child commands, loading deferred ones.
        store (SpecStore): Root grammars, used when a command slot delegates.
        cwd (Path): Directory path suggestions are listed from.
        shell (Shell): Shell flavor of the request.
    """

    def __init__(
        self,
        resolver: SpecResolver,
        store: SpecStore,
        cwd: Path,
        shell: Shell = Shell.BASH,
    ):
        self.resolver = resolver
        self.store = store
        self.cwd = cwd
        self.shell = shell

    async def match_subcommand(
        self,
        tokens: Sequence[CommandToken],
        node: SubcommandNode,
        persistent_options: Sequence[Option] = (),
        accepted_tokens: Sequence[CommandToken] = (),
        arguments_exhausted: bool = False,
        arguments_consumed_any: bool = False,
    ) -> SuggestionContext | None:
        logger.debug(
            "match_subcommand: node=%s tokens=%s exhausted=%s consumed=%s",
            node.name,
            [token.text for token in tokens],
            arguments_exhausted,
            arguments_consumed_any,
        )
        if not tokens or not tokens[0].complete:
            return self._subcommand_context(
                node,
                persistent_options,
                tokens[0] if tokens else None,
                accepted_tokens,
                arguments_exhausted,
                arguments_consumed_any,
            )

        token = tokens[0]
        if token.is_option:
            option = find_option(token.text, [*persistent_options, *node.options])
            if option is None:
                logger.debug("Unknown option '%s' on '%s'.", token.text, node.name)
                return None
            return await self.match_option(
                tokens, option, node, persistent_options, accepted_tokens
            )

        child = await self.resolver.resolve_child(node, token.text)
        if child is not None:
            return await self.match_subcommand(
                tokens[1:],
                child,
                merge_persistent_options(persistent_options, node.options),
                filter_persistent_tokens([*accepted_tokens, token]),
            )

        if not node.argument_slots:
            logger.debug(
                "'%s' takes no arguments; '%s' is unconsumable.", node.name, token.text
            )
            return None
        return await self.match_argument(
            tokens,
            node.argument_slots,
            node,
            persistent_options,
            accepted_tokens,
            from_option=False,
            from_variadic=False,
        )

    async def match_argument(
        self,
        tokens: Sequence[CommandToken],
        slots: Sequence[ArgumentSlot],
        node: SubcommandNode,
        persistent_options: Sequence[Option],
        accepted_tokens: Sequence[CommandToken],
        from_option: bool,
        from_variadic: bool,
    ) -> SuggestionContext | None:
        if not slots:
            return await self.match_subcommand(
                tokens,
                node,
                persistent_options,
                accepted_tokens,
                arguments_exhausted=True,
                arguments_consumed_any=not from_option,
            )
        if not tokens or not tokens[0].complete:
            return self._argument_context(
                slots,
                node,
                persistent_options,
                tokens[0] if tokens else None,
                accepted_tokens,
                from_variadic,
            )

        token = tokens[0]
        if all(slot.is_optional for slot in slots):
            if token.is_option:
                option = find_option(token.text, [*persistent_options, *node.options])
                if option is None:
                    logger.debug("Unknown option '%s' on '%s'.", token.text, node.name)
                    return None
                return await self.match_option(
                    tokens, option, node, persistent_options, accepted_tokens
                )
            child = await self.resolver.resolve_child(node, token.text)
            if child is not None:
                return await self.match_subcommand(
                    tokens[1:],
                    child,
                    merge_persistent_options(persistent_options, node.options),
                    filter_persistent_tokens([*accepted_tokens, token]),
                )

        slot = slots[0]
        if slot.is_variadic:
            return await self.match_argument(
                tokens[1:],
                slots,
                node,
                persistent_options,
                [*accepted_tokens, token],
                from_option,
                from_variadic=True,
            )
        if slot.is_command:
            return await self._match_command(tokens)
        return await self.match_argument(
            tokens[1:],
            slots[1:],
            node,
            persistent_options,
            [*accepted_tokens, token],
            from_option,
            from_variadic=False,
        )

    async def match_option(
        self,
        tokens: Sequence[CommandToken],
        option: Option,
        node: SubcommandNode,
        persistent_options: Sequence[Option],
        accepted_tokens: Sequence[CommandToken],
    ) -> SuggestionContext | None:
        if not tokens:
            raise InvalidMatcherStateError(
                f"Option '{option.name}' matched but no token is left to consume."
            )
        token = tokens[0]
        is_persistent = option.is_persistent or any(
            known.matches(token.text) for known in persistent_options
        )
        accepted = [*accepted_tokens, token.as_persistent(is_persistent)]
        if option.argument_slots:
            return await self.match_argument(
                tokens[1:],
                option.argument_slots,
                node,
                persistent_options,
                accepted,
                from_option=True,
                from_variadic=False,
            )
        return await self.match_subcommand(
            tokens[1:], node, persistent_options, accepted
        )

    async def _match_command(
        self, tokens: Sequence[CommandToken]
    ) -> SuggestionContext | None:
        if len(tokens) < 2:
            return None
        root = await self.store.load_root(tokens[0].text)
        if root is None:
            logger.debug("No grammar for delegated command '%s'.", tokens[0].text)
            return None
        return await self.match_subcommand(tokens[1:], root)

    def _subcommand_context(
        self,
        node: SubcommandNode,
        persistent_options: Sequence[Option],
        partial_token: CommandToken | None,
        accepted_tokens: Sequence[CommandToken],
        arguments_exhausted: bool,
        arguments_consumed_any: bool,
    ) -> SuggestionContext:
        return SuggestionContext(
            kind=ContextKind.SUBCOMMAND,
            node=node,
            options=[*persistent_options, *node.options],
            argument_slots=list(node.argument_slots),
            partial_token=partial_token,
            accepted_tokens=list(accepted_tokens),
            cwd=self.cwd,
            shell=self.shell,
            arguments_exhausted=arguments_exhausted,
            arguments_consumed_any=arguments_consumed_any,
        )

    def _argument_context(
        self,
        slots: Sequence[ArgumentSlot],
        node: SubcommandNode,
        persistent_options: Sequence[Option],
        partial_token: CommandToken | None,
        accepted_tokens: Sequence[CommandToken],
        from_variadic: bool,
    ) -> SuggestionContext:
        return SuggestionContext(
            kind=ContextKind.ARGUMENT,
            node=node,
            options=[*persistent_options, *node.options],
            argument_slots=list(slots),
            partial_token=partial_token,
            accepted_tokens=list(accepted_tokens),
            cwd=self.cwd,
            shell=self.shell,
            from_variadic=from_variadic,
        )
