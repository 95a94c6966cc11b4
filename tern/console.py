# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Tern CLI output."""
from rich.console import Console

from tern.themes import get_tern_theme

console = Console(color_system="truecolor", theme=get_tern_theme())
