"""Excel rendering for Office Nexus bookkeeping reports."""

from .report_renderer import NexusReportRenderer

__all__ = ["NexusReportRenderer"]
