"""Scan orchestration package for dirstream.

This package contains the components that run a scan for an interactive
caller:
- ScanLogger: Structured logging of a scan run to a timestamped log file.
- ScanOrchestrator: Wires the scanner, sinks, logger, and terminal UI.
"""

from dirstream.orchestration.scan_logger import ScanLogger
from dirstream.orchestration.scan_orchestrator import ScanOrchestrator

__all__ = ["ScanLogger", "ScanOrchestrator"]
