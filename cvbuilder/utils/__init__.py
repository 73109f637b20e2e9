"""
Shared utilities for CV Builder.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps for log directories
- PDF inspection
"""

from cvbuilder.utils.timestamp import now, today

__all__ = ["now", "today"]
