"""
Helpers for describing JSON documents with JSON schemas and converting them to Python objects.
"""

from typing import Any, Dict


JSONSchema = Dict[str, Any]
