"""
Articulation — Collaborator Interfaces

Protocol definitions for the collaborators the core depends on but does
not own:
  1. Key-value store     — string-keyed persistence of serialized records
  2. Archetype classifier — maps a score profile to a communication style

Services receive these through their constructors — never by reaching
into a global.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from .models import Archetype, CommunicationScore


# ═══════════════════════════════════════════════════════════════════════════
# Persistence
# ═══════════════════════════════════════════════════════════════════════════

@runtime_checkable
class KeyValueStore(Protocol):
    """
    Minimal string store. Implementations may raise on failure; callers
    wrap them in SafeStore, which turns failures into "absent" / no-op.
    """

    def get(self, key: str) -> Optional[str]:
        """Stored value, or None when absent."""
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


# ═══════════════════════════════════════════════════════════════════════════
# Classification
# ═══════════════════════════════════════════════════════════════════════════

@runtime_checkable
class ArchetypeClassifier(Protocol):

    def __call__(self, score: CommunicationScore) -> Optional[Archetype]:
        """Archetype for the profile, or None when it cannot be classified."""
        ...
