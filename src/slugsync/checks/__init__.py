"""
Slug validation rules.
"""

from .rules import SlugIssue, validate_slug

__all__ = ["SlugIssue", "validate_slug"]
