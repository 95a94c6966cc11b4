# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Shell`, the enum of shell flavors Tern can complete for.

The shell decides path syntax: which separator marks a token as a path and how
the final path segment is split off when computing how many characters a
completion replaces.

Aliases:
    "powershell" → "pwsh"
    "nushell" → "nu"
    "cmd.exe" → "cmd"

Example:
    Shell("powershell") → Shell.PWSH
"""
from __future__ import annotations

import os
from enum import Enum


class Shell(Enum):
    """Supported shell flavors."""

    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"
    PWSH = "pwsh"
    CMD = "cmd"
    NU = "nu"
    XONSH = "xonsh"

    @classmethod
    def choices(cls) -> list[Shell]:
        """Return a list of all shell choices."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "powershell": "pwsh",
            "nushell": "nu",
            "cmd.exe": "cmd",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> Shell:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def path_separator(self) -> str:
        """The separator that marks a token as a filesystem path."""
        if self is Shell.CMD:
            return "\\"
        if self is Shell.PWSH:
            return os.sep
        return "/"

    @property
    def escape_char(self) -> str:
        """The character that escapes the next character inside a word."""
        if self is Shell.CMD:
            return "^"
        if self is Shell.PWSH:
            return "`"
        return "\\"

    def base_name(self, token: str) -> str:
        """Return the final path segment of `token` under this shell's syntax."""
        return token.rsplit(self.path_separator, 1)[-1]

    def __str__(self) -> str:
        return self.value
