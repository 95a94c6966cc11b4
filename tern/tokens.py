# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Token model and tokenizer for raw command-line text.

`parse_command()` splits the text before the cursor into `CommandToken`s,
honoring single quotes, double quotes and the shell's escape character. Every
token except the last is complete; the last token is complete only when the
text ends in unquoted whitespace, meaning the cursor has already left it.

Pipes, redirects and substitutions are not interpreted: they are ordinary
characters inside tokens.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace

QUOTES = ("'", '"')


@dataclass
class CommandToken:
    """
    A syntactic unit of typed input.

    Attributes:
        text (str): The token with quotes and escapes removed.
        complete (bool): False while the cursor is still inside the token.
        is_option (bool): True if the token looks like a flag (`-x`, `--name`).
        is_persistent (bool): True if the token was accepted for a persistent
            option and survives subcommand boundaries.
        is_path (bool): True if the path resolver recognized a filesystem path.
        is_path_complete (bool): True if the path ends in a separator.
        is_quoted (bool): True if any part of the token was quoted.
        raw (str): The source characters, including quotes and escapes.
    """

    text: str
    complete: bool = True
    is_option: bool = False
    is_persistent: bool = False
    is_path: bool = False
    is_path_complete: bool = False
    is_quoted: bool = False
    raw: str = field(default="", repr=False)

    def __post_init__(self):
        if not self.raw:
            self.raw = self.text

    def as_persistent(self, is_persistent: bool = True) -> CommandToken:
        """Return a copy of this token with the persistent flag set."""
        return replace(self, is_persistent=is_persistent)

    @classmethod
    def placeholder(cls) -> CommandToken:
        """An empty in-progress token marking "ready for the next token"."""
        return cls(text="", complete=False)


def _finish(text: list[str], raw: list[str], quoted: bool) -> CommandToken:
    joined = "".join(text)
    return CommandToken(
        text=joined,
        is_option=not quoted and len(joined) > 1 and joined.startswith("-"),
        is_quoted=quoted,
        raw="".join(raw),
    )


def parse_command(command: str, escape_char: str = "\\") -> list[CommandToken]:
    """
    Split raw command-line text into tokens with completeness flags.

    Args:
        command (str): The text before the cursor.
        escape_char (str): The shell's escape character.

    Returns:
        list[CommandToken]: Tokens in order. Empty if the text holds no token.
    """
    tokens: list[CommandToken] = []
    text: list[str] = []
    raw: list[str] = []
    quote: str | None = None
    quoted = False
    escaped = False
    in_token = False

    for char in command:
        if escaped:
            text.append(char)
            raw.append(char)
            escaped = False
            continue
        if quote:
            raw.append(char)
            if char == quote:
                quote = None
            else:
                text.append(char)
            continue
        if char == escape_char:
            raw.append(char)
            escaped = True
            in_token = True
        elif char in QUOTES:
            raw.append(char)
            quote = char
            quoted = True
            in_token = True
        elif char.isspace():
            if in_token:
                tokens.append(_finish(text, raw, quoted))
                text, raw, quoted, in_token = [], [], False, False
        else:
            text.append(char)
            raw.append(char)
            in_token = True

    if in_token:
        token = _finish(text, raw, quoted)
        token.complete = False
        tokens.append(token)
    return tokens
