"""
Feature modules for the Atelier backend.

Each module is self-contained with its own:
- models.py: Pydantic models for data transfer
- repository.py: Supabase data access
- routes.py: FastAPI route handlers
- exceptions.py: Module-specific exceptions

The auth module additionally exposes Protocol interfaces (interfaces.py)
for the identity provider and mailer so they can be swapped in tests.
"""
