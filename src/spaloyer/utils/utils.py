"""
Utilities for the spaloyer CLI application.

This module provides utility functions for display and logging.
"""

import logging
import os
from datetime import datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

# Create a shared console instance for consistent output
console = Console()


name = "SPAloyer upload job"
version = "Version 1.0.0"

def info(text: Text) -> None:
    """
    Display an information message in a styled panel.

    Args:
        text (Text): The text to display
    """
    panel = Panel(text, title=name, title_align="left", subtitle=f"{version}", subtitle_align="left")
    console.print(panel)
    return None

def pretty_print(text: str) -> None:
    """
    Display text with rich formatting.

    Args:
        text (str): The text to display
    """
    console.print(text, markup=False, highlight=False)
    return None

def setup_logging(verbose: bool = False, log_folder: str = "log") -> logging.Logger:
    """
    Configure and return a logger for the application.

    Args:
        verbose (bool, optional): If True, display debug messages in the console. Defaults to False.
        log_folder (str, optional): Folder receiving the log files. Defaults to "log".

    Returns:
        logging.Logger: The configured logger
    """
    os.makedirs(log_folder, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_filename = os.path.join(log_folder, f"log_{timestamp}.log")

    # Remove all handlers for root logger
    logger = logging.getLogger()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    logger.setLevel(logging.DEBUG)

    # File handler (DEBUG level) with UTF-8 encoding
    fh = logging.FileHandler(log_filename, encoding='utf-8')
    fh.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    fh.setFormatter(file_formatter)
    logger.addHandler(fh)

    # boto debug output is only useful in the log file
    for noisy in ("botocore", "boto3", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.INFO)

    # Rich console handler (INFO or DEBUG level based on verbose)
    rich_handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        markup=False,
        show_time=False,
        show_path=False,
        level=logging.DEBUG if verbose else logging.INFO
    )
    logger.addHandler(rich_handler)

    return logger
