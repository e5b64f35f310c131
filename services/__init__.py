from .content import ContentService

__all__ = ["ContentService"]
