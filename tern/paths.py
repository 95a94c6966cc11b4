# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Path awareness for the in-progress token.

`resolve_cwd()` decides whether the token being typed is a filesystem path and,
if so, which directory its completions should be listed from. A token is a path
when it contains the shell's path separator and the directory it lists from is
readable. `src/au` resolves to `<cwd>/src` with `is_path_complete=False`;
`src/` resolves to `<cwd>/src` with `is_path_complete=True`.
"""
from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path

from tern.shell import Shell
from tern.tokens import CommandToken


@dataclass(frozen=True)
class ResolvedCwd:
    """Directory to list completions from, and what the token turned out to be."""

    cwd: Path
    is_path: bool = False
    is_path_complete: bool = False


def _readable_dir(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.R_OK)


def _resolve(token: CommandToken | None, cwd: Path, shell: Shell) -> ResolvedCwd:
    if token is None:
        return ResolvedCwd(cwd)
    separator = shell.path_separator
    text = token.text
    if separator not in text:
        return ResolvedCwd(cwd)

    complete = text.endswith(separator)
    native = text.replace(separator, os.sep) if separator != os.sep else text
    candidate = Path(native).expanduser()
    if not candidate.is_absolute():
        candidate = cwd / candidate

    if complete and _readable_dir(candidate):
        return ResolvedCwd(candidate, is_path=True, is_path_complete=True)
    # the final segment is still being typed; list its parent
    parent = candidate.parent
    if not complete and _readable_dir(parent):
        return ResolvedCwd(parent, is_path=True, is_path_complete=False)
    return ResolvedCwd(cwd)


async def resolve_cwd(
    token: CommandToken | None, cwd: str | Path, shell: Shell
) -> ResolvedCwd:
    """
    Resolve the listing directory for `token`.

    Args:
        token (CommandToken | None): The in-progress token, if any.
        cwd (str | Path): The shell's working directory.
        shell (Shell): Shell flavor deciding path syntax.

    Returns:
        ResolvedCwd: The listing directory and path flags. Non-path tokens get
        `cwd` back unchanged.
    """
    return await asyncio.to_thread(_resolve, token, Path(cwd), shell)
