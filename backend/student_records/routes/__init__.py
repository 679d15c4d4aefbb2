"""Application route blueprints and helpers."""

from .students import get_store, students_bp

__all__ = ["students_bp", "get_store"]
