"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer keeps SQL out of the API routes. Each module works on one model
and raises jobly.core.exceptions errors for missing or conflicting rows.
"""

from jobly.crud import company, job, user

__all__ = ["company", "job", "user"]
