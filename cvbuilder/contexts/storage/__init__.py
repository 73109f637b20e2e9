"""
Storage Context

Responsibilities:
- Holds the one current ResumeDocument per server process

Never: Sanitizes input (intake does that before set())
"""

from cvbuilder.contexts.storage.store import InMemoryResumeStore, ResumeStore

__all__ = ["ResumeStore", "InMemoryResumeStore"]
