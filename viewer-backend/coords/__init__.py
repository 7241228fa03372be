"""Coordinate helpers for loosely structured site tables.

Modules:
 - parser: decimal-degree / DMS cell parsing
 - headers: case-insensitive column lookup and the accepted aliases
"""

__all__ = [
    "parser",
    "headers",
]
