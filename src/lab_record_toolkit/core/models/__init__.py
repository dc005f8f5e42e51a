"""
Core Models Package

Immutable data models that serve as the single source of truth.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation during layout
2. Safe to hand to independent generation calls
3. Easier to reason about data flow
"""

from .record import LabRecord, RECORD_FIELDS

__all__ = [
    "LabRecord",
    "RECORD_FIELDS",
]
