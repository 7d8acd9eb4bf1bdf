"""Type definitions for must-gather data structures and their expansion."""

from .graph import TypeGraph, expand, render_declarations
from .models import TypeDescriptor

__all__ = ["TypeDescriptor", "TypeGraph", "expand", "render_declarations"]
