"""
Tern Completion Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import asyncio
import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.shortcuts import CompleteStyle
from rich.table import Table

from tern.completer import TernCompleter
from tern.config import TernConfig, find_tern_config, load_config
from tern.console import console
from tern.exceptions import ConfigError
from tern.parsers import get_arg_parsers
from tern.probe import build_shell_probe
from tern.runtime import SuggestionEngine
from tern.shell import Shell
from tern.suggestion import SuggestionResult
from tern.themes import get_prompt_style
from tern.utils import setup_logging


def resolve_config(config_path: Path | None) -> tuple[TernConfig, Path | None]:
    """Load the explicit config, else the first one found, else defaults."""
    path = config_path or find_tern_config()
    if path is None:
        return TernConfig(), None
    return load_config(path), path


def build_engine(
    config: TernConfig, args: Namespace, base: Path | None
) -> SuggestionEngine:
    catalog = config.build_catalog(base, extra_dirs=args.spec_dirs)
    probe = build_shell_probe(config.probe_timeout)
    return SuggestionEngine(catalog, shell_probe=probe)


def render_result(result: SuggestionResult) -> None:
    table = Table(caption=f"characters to drop: {result.characters_to_drop}")
    table.add_column("Suggestion")
    table.add_column("Kind")
    table.add_column("Description", style="tern.description")
    for suggestion in result.suggestions:
        table.add_row(
            suggestion.display,
            f"[tern.{suggestion.kind}]{suggestion.kind}[/]",
            suggestion.description,
        )
    console.print(table)


def run_complete(engine: SuggestionEngine, args: Namespace, shell: Shell) -> int:
    cwd = args.cwd or Path.cwd()
    result = asyncio.run(engine.get_suggestions(args.text, cwd, shell))
    if args.json:
        print(json.dumps(result.as_dict() if result else None))
        return 0 if result else 1
    if result is None:
        console.print("[tern.description]No suggestions.[/]")
        return 1
    render_result(result)
    return 0


def run_list(engine: SuggestionEngine, args: Namespace) -> int:
    for name in engine.catalog.root_names:
        if name.startswith(args.prefix):
            console.print(name, highlight=False)
    return 0


async def run_shell(engine: SuggestionEngine, shell: Shell) -> int:
    session: PromptSession = PromptSession(
        completer=TernCompleter(engine, shell=shell),
        complete_while_typing=True,
        complete_style=CompleteStyle.COLUMN,
        style=get_prompt_style(),
    )
    console.print("[tern.description]Type a command; Ctrl-D to exit.[/]")
    while True:
        try:
            line = await session.prompt_async("tern> ")
        except KeyboardInterrupt:
            continue
        except EOFError:
            return 0
        console.print(line, highlight=False, markup=False)


def main(argv: Sequence[str] | None = None) -> int:
    parsers = get_arg_parsers()
    args = parsers.parse_args(argv)
    try:
        config, config_path = resolve_config(args.config)
    except ConfigError as error:
        console.print(f"[tern.error]❌ {error}[/]", highlight=False)
        return 2

    setup_logging(
        mode=config.log_mode,
        log_filename=config.log_filename,
        console_log_level=logging.DEBUG if args.verbose else config.console_log_level,
    )
    engine = build_engine(config, args, config_path.parent if config_path else None)
    shell = getattr(args, "shell", None) or config.shell

    if args.command == "complete":
        return run_complete(engine, args, shell)
    if args.command == "list":
        return run_list(engine, args)
    return asyncio.run(run_shell(engine, shell))


if __name__ == "__main__":
    sys.exit(main())
