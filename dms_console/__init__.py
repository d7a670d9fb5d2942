"""dms-console: document schema catalogs, dynamic forms and value validation."""

from .stores.repository import ConsoleRepository

__all__ = ["ConsoleRepository"]
