"""Async batch resizing."""

from iconcache.concurrency.pool import ResizePool

__all__ = ["ResizePool"]
