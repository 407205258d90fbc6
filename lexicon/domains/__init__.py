"""
Domains - Business logic layer.

Each domain is self-contained with:
- models.py: Pydantic data models
- contracts.py: Interfaces (Protocol classes), where the domain has seams
- Implementation files
- test_*.py beside the code
"""

__all__ = [
    "entries",
    "search",
]
