"""
Project category repository for database access.
"""

from shared.catalog import CategoryRepository
from .models import ProjectCategory


class ProjectCategoryRepository(CategoryRepository[ProjectCategory]):
    """Portfolio categories with embedded projects."""

    table = "project_categories"
    items_field = "projects"
    model = ProjectCategory
