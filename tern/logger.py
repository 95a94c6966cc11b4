# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Tern."""
import logging

logger: logging.Logger = logging.getLogger("tern")
