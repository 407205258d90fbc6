"""
Adapters - External storage integrations.

Persistence is wrapped here to isolate domains from storage details.
"""

from .sqlite import EntryRepository

__all__ = ["EntryRepository"]
