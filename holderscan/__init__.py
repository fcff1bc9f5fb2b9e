from .config import ScanConfig
from .scanner import HolderScanner, ScanOutcome, ScanSummary
from .state import ScanState, StateStore

__all__ = [
    "HolderScanner",
    "ScanConfig",
    "ScanOutcome",
    "ScanState",
    "ScanSummary",
    "StateStore",
]
