from __future__ import annotations

from database.database import Store
from database.user import User
from errors import ValidationError


# ───────────────────────────────  CONTENT  ────────────────────────────────
def clean_content(content) -> str:
    """Texte nettoyé (strip) ; ValidationError s'il ne reste rien."""
    if not isinstance(content, str):
        raise ValidationError()
    raw = content.strip()
    if not raw:
        raise ValidationError()
    return raw


# ───────────────────────────────  USERS  ──────────────────────────────────
# L'inscription vit hors du store : ce helper sert au bootstrap (create_db.py) et aux tests.
async def create_user(store: Store, first_name: str, last_name: str | None = None,
                      email: str | None = None) -> User:
    async with store.transaction() as ses:
        user = User(first_name=first_name, last_name=last_name, email=email)
        ses.add(user)
        await ses.flush()
        await ses.refresh(user)
        return user

