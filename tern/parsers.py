# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides the argument parser infrastructure for the Tern CLI.

Key Components:
- `TernParsers`: Container for the root parser and its subcommand parsers.
- `get_root_parser()`: Creates the root-level parser with global options.
- `get_arg_parsers()`: Factory for the full parser suite (`complete`, `list`,
  `shell`).
"""

from argparse import ArgumentParser, Namespace, _SubParsersAction
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Sequence

from tern.shell import Shell


@dataclass
class TernParsers:
    """Defines the argument parsers for the Tern CLI."""

    root: ArgumentParser
    subparsers: _SubParsersAction
    complete: ArgumentParser
    list: ArgumentParser
    shell: ArgumentParser

    def parse_args(self, args: Sequence[str] | None = None) -> Namespace:
        """Parse the command line arguments."""
        return self.root.parse_args(args)

    def as_dict(self) -> dict[str, ArgumentParser]:
        """Convert the TernParsers instance to a dictionary."""
        return asdict(self)

    def get_parser(self, name: str) -> ArgumentParser | None:
        """Get the parser by name."""
        return self.as_dict().get(name)


def get_root_parser(
    prog: str | None = "tern",
    description: str | None = "Tern - grammar-driven shell completion suggestions.",
    epilog: str | None = "Tip: Use 'tern complete \"git che\"' to try a completion.",
) -> ArgumentParser:
    """
    Construct the root-level ArgumentParser for the Tern CLI.

    Notes:
        ```
        Includes the following arguments:
            -v / --verbose       : Enable debug logging.
            --config PATH        : Use this config file instead of searching.
            --spec-dir DIR       : Extra grammar directory (repeatable).
        ```
    """
    parser = ArgumentParser(prog=prog, description=description, epilog=epilog)
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging for Tern."
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="Path to a tern.yaml or tern.toml file."
    )
    parser.add_argument(
        "--spec-dir",
        dest="spec_dirs",
        type=Path,
        action="append",
        default=[],
        help="Additional grammar directory; may be given more than once.",
    )
    return parser


def _add_shell_argument(parser: ArgumentParser) -> None:
    parser.add_argument(
        "--shell",
        type=Shell,
        choices=Shell.choices(),
        default=None,
        help="Shell flavor for path syntax (default: from config, else bash).",
    )


def get_arg_parsers(root_parser: ArgumentParser | None = None) -> TernParsers:
    """Build the full parser suite for the Tern CLI."""
    root = root_parser or get_root_parser()
    subparsers = root.add_subparsers(dest="command", required=True)

    complete = subparsers.add_parser(
        "complete",
        help="Print suggestions for a command line",
        description="Compute completion suggestions for TEXT as if the cursor "
        "were at its end.",
    )
    complete.add_argument("text", help="Command-line text before the cursor.")
    complete.add_argument(
        "--cwd", type=Path, default=None, help="Working directory (default: current)."
    )
    complete.add_argument(
        "--json", action="store_true", help="Print the result as JSON."
    )
    _add_shell_argument(complete)

    list_parser = subparsers.add_parser(
        "list", help="List known root commands", description="List known root commands."
    )
    list_parser.add_argument(
        "prefix", nargs="?", default="", help="Only list commands starting with PREFIX."
    )

    shell = subparsers.add_parser(
        "shell",
        help="Try completions in an interactive prompt",
        description="Open an interactive prompt with Tern completions.",
    )
    _add_shell_argument(shell)

    return TernParsers(
        root=root,
        subparsers=subparsers,
        complete=complete,
        list=list_parser,
        shell=shell,
    )
