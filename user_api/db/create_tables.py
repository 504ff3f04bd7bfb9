"""Create the users/user_logins schema (``python -m user_api.db.create_tables``)."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from user_api.core.config import get_settings

from .session import Base, engine_for
from . import models  # noqa: F401  # registers the tables on Base.metadata


def create_all(engine=None) -> None:
    Base.metadata.create_all(bind=engine if engine is not None else engine_for(get_settings()))


if __name__ == "__main__":
    settings = get_settings()
    try:
        create_all(engine_for(settings))
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print(f"Tables ready on {settings.database_url.split('://', 1)[0]} database.")
