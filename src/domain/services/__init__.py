"""Domain services."""

from src.domain.services.contact import ContactResult, ContactService, ContactSubmission
from src.domain.services.dashboard import DashboardService
from src.domain.services.progress import (
    compute_org_rates,
    compute_user_progress,
    merge_activity_timeline,
    merge_item_status,
)
from src.domain.services.rate_limit import InMemoryWindowStore, RateLimiter, WindowStore

__all__ = [
    "ContactResult",
    "ContactService",
    "ContactSubmission",
    "DashboardService",
    "InMemoryWindowStore",
    "RateLimiter",
    "WindowStore",
    "compute_org_rates",
    "compute_user_progress",
    "merge_activity_timeline",
    "merge_item_status",
]
