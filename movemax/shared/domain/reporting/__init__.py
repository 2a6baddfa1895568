"""Dashboard metrics and global search."""

from movemax.shared.domain.reporting.metrics import DashboardMetrics, MonthBucket, dashboard_metrics
from movemax.shared.domain.reporting.search import SearchHit, global_search

__all__ = ["DashboardMetrics", "MonthBucket", "SearchHit", "dashboard_metrics", "global_search"]
