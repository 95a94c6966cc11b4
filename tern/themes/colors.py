# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
One Dark color constants and the Rich theme used by the Tern CLI.

Each suggestion kind has a named style in the theme so tables and the
interactive shell render subcommands, options, arguments and paths the same way.
"""
from prompt_toolkit.styles import Style as PromptStyle
from rich.style import Style
from rich.theme import Theme


class OneColors:
    """One Dark palette as hex strings, with `_b` bold variants."""

    BLACK = "#282C34"
    WHITE = "#ABB2BF"
    COMMENT_GREY = "#5C6370"
    DARK_RED = "#BE5046"
    RED = "#E06C75"
    GREEN = "#98C379"
    YELLOW = "#E5C07B"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"
    CYAN = "#56B6C2"

    GREEN_b = f"bold {GREEN}"
    BLUE_b = f"bold {BLUE}"
    CYAN_b = f"bold {CYAN}"


def get_tern_theme() -> Theme:
    """Return the Rich theme mapping suggestion kinds to colors."""
    return Theme(
        {
            "tern.subcommand": Style.parse(OneColors.BLUE_b),
            "tern.option": Style.parse(OneColors.MAGENTA),
            "tern.argument": Style.parse(OneColors.GREEN),
            "tern.path": Style.parse(OneColors.CYAN),
            "tern.description": Style.parse(OneColors.COMMENT_GREY),
            "tern.error": Style.parse(OneColors.DARK_RED),
        }
    )


def get_prompt_style() -> PromptStyle:
    """Return the Prompt Toolkit style for the completion menu classes."""
    return PromptStyle.from_dict(
        {
            "tern.subcommand": OneColors.BLUE_b,
            "tern.option": OneColors.MAGENTA,
            "tern.argument": OneColors.GREEN,
            "tern.path": OneColors.CYAN,
        }
    )
