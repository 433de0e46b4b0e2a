"""
Domain services for the agency management system.
"""

from .billing_service import BillingService
from .numbering_service import NumberingService
from .project_stats_service import ProjectStatsService

__all__ = [
    "BillingService",
    "NumberingService",
    "ProjectStatsService",
]
