"""Dienste: Abfragen und Sitzungskontext."""

from services.queries import EnrollmentQueries, StudentLookup
from services.context import AppContext

__all__ = ["EnrollmentQueries", "StudentLookup", "AppContext"]
