"""Business logic services."""

from mumpa_admin.services.children_service import ChildrenService
from mumpa_admin.services.field_migration import MigrationReport
from mumpa_admin.services.percentile_seeder import seed_growth_percentiles
from mumpa_admin.services.vaccine_seeder import seed_vaccine_schedule

__all__ = ["ChildrenService", "MigrationReport", "seed_growth_percentiles", "seed_vaccine_schedule"]
