"""Disk usage reporting for Joplin resources, grouped by notebook."""

from .report import DiskUsageReport, ReportResult

__all__ = ["DiskUsageReport", "ReportResult"]
