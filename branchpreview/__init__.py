"""Per-branch preview deployments on a shared host."""

__version__ = "0.1.0"
