from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from .config import settings


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    # SQLite has no READ COMMITTED level; its default serialized writes already
    # keep the seed invisible until commit.
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        database_url,
        echo=echo,
        isolation_level="READ COMMITTED",
        pool_pre_ping=True,
    )


engine = create_db_engine(settings.database_url, echo=settings.debug)


def init_db(target: Optional[Engine] = None) -> None:
    # Importar modelos para asegurar que todas las tablas estén registradas en el metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(target or engine)

