"""Ready-made plots composed from the rendering layer."""

from . import vector_field

__all__ = ['vector_field']
