"""
Entry point for running pdfextract as a module.

Usage:
    python -m pdfextract --help
    python -m pdfextract convert paper.pdf -t sections --to text
"""
from .cli import app


if __name__ == "__main__":
    app()
