"""Persistence layer for small file-backed datasets.

Provides locked JSON file storage used by the language registry.
"""

from infrastructure.persistence.json_file import read_json, write_json_locked

__all__ = ["read_json", "write_json_locked"]
