# errors.py
from __future__ import annotations


class ContentError(Exception):
    """Base de toutes les erreurs remontées par le store et le service."""

    message = "Server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(ContentError):
    message = "Content is required"


class NotFound(ContentError):
    message = "Not found"


class Forbidden(ContentError):
    # jamais l'auteur réel dans le message
    message = "Unauthorized"


class StoreError(ContentError):
    """Panne base de données (connexion, contrainte, requête). Détail uniquement dans les logs."""
