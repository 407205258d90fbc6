"""
CLI Interface - Command-line tools for Lexicon.

Provides commands for:
- Database setup and JSON import
- Ranked search and score explanations
- Running the API server
"""

from .main import app, main

__all__ = ["app", "main"]
