"""Terminal UI package for dirstream."""

from .scan_tui import ScanTUI, format_size

__all__ = ["ScanTUI", "format_size"]
