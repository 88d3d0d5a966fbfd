"""Entry operations driven by the picker."""

from .runner import ActionRunner

__all__ = ["ActionRunner"]
