"""
Core package: data models shared by the builder pipeline.
"""

from .models import LabRecord

__all__ = ["LabRecord"]
