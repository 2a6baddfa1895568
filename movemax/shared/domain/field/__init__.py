"""Field-mode helpers: scanner lookup and shift timer."""

from movemax.shared.domain.field.scanner import ScanResult, apply_scan_status, find_scan_target, format_elapsed

__all__ = ["ScanResult", "apply_scan_status", "find_scan_target", "format_elapsed"]
