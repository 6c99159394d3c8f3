import os
from pathlib import Path
from typing import Generator, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./championships.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("true", "1", "yes")


def build_engine(url: str = DATABASE_URL, echo: bool = SQL_ECHO) -> Engine:
    """Create an engine; file-backed SQLite gets its parent directory created."""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if ":memory:" not in url:
            Path(url.replace("sqlite:///", "", 1)).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, echo=echo, connect_args=connect_args)


engine: Engine = build_engine()


def get_session() -> Generator[Session, None, None]:
    """Get database session"""
    with Session(engine) as session:
        yield session


def _register_models() -> None:
    # Tables exist in SQLModel metadata only once their module is imported
    from treegen.models.category import Category  # noqa: F401
    from treegen.models.championship import Championship  # noqa: F401
    from treegen.models.championship_settings import ChampionshipSettings  # noqa: F401
    from treegen.models.competitor import Competitor  # noqa: F401
    from treegen.models.fight import Fight  # noqa: F401
    from treegen.models.fighters_group import FightersGroup  # noqa: F401
    from treegen.models.team import Team  # noqa: F401


def init_db(bind: Optional[Engine] = None) -> None:
    """Create all championship and tree tables"""
    _register_models()
    SQLModel.metadata.create_all(bind or engine)


def drop_db(bind: Optional[Engine] = None) -> None:
    """Drop all championship and tree tables"""
    _register_models()
    SQLModel.metadata.drop_all(bind or engine)
