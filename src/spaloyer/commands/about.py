"""
About module for the spaloyer application.

This module provides information about the project.
"""

from rich.text import Text
import typer

import spaloyer.utils.utils as utils

app = typer.Typer()

text = Text.assemble(
    ("SPAloyer: ship a static build to an S3-compatible bucket\n", "bold"),
    ("Every file of the data directory is stored under its relative path.\n", "grey53"),
    ("\n", ""),
    ("Works with MinIO, AWS S3 and other S3-compatible stores", "italic"),
    justify="center")

@app.command()
def about() -> None:
    """
    Display information about the project.
    """
    utils.info(text)
