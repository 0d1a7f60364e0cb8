"""Helm chart rendering."""

from .renderer import HelmRenderer

__all__ = ["HelmRenderer"]
