from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from database.database import Base


class User(Base):
    """Auteurs du mur. Le store les lit, ne les modifie jamais."""

    __tablename__ = "users"

    id:          Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # профиль (first_name = nom affiché)
    first_name:  Mapped[str] = mapped_column(String(60), nullable=False)
    last_name:   Mapped[str | None] = mapped_column(String(60), nullable=True)
    email:       Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)

    created_at:  Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
