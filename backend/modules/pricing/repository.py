"""
Pricing repository for database access.
"""

from shared.catalog import CategoryRepository
from .models import PricingCategory


class PricingRepository(CategoryRepository[PricingCategory]):
    """Pricing categories with embedded plans."""

    table = "pricing_categories"
    items_field = "plans"
    model = PricingCategory
