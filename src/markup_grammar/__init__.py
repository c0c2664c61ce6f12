"""Token-tree grammar toolkit for a markup DSL embedded in macro input."""

__version__ = "0.1.0"
