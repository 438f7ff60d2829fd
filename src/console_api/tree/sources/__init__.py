"""Source adapters contributing top-level nodes to the content tree."""

from console_api.tree.sources.assets import AssetSource
from console_api.tree.sources.dashboards import DashboardSource, order_dashboards
from console_api.tree.sources.objects import ObjectSource
from console_api.tree.sources.recycle import RecycleSource
from console_api.tree.sources.repository import RepositorySource
from console_api.tree.sources.schedule import ScheduleSource, task_label

__all__ = [
    "AssetSource",
    "DashboardSource",
    "ObjectSource",
    "RecycleSource",
    "RepositorySource",
    "ScheduleSource",
    "order_dashboards",
    "task_label",
]
