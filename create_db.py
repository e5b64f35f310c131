# create_db.py
import asyncio
import sys

from config import DB_PATH
from database.database import Store
from database.utils import create_user


async def create(names: list[str]) -> None:
    """Crée toutes les tables de la base (SQLite ou autre), puis les utilisateurs demandés."""
    store = Store(DB_PATH)
    try:
        await store.init_db()
        for name in names:
            user = await create_user(store, first_name=name)
            print(f"👤 Utilisateur #{user.id} créé : {user.first_name}")
    finally:
        await store.close()
    print("✅ Base de données initialisée avec succès.")

if __name__ == "__main__":
    asyncio.run(create(sys.argv[1:]))
