"""Trace-driven simulator of paged virtual memory with swap and page replacement."""

__version__ = "0.1.0"