"""Module: session."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pawfund.core.config import settings


def build_engine(database_url: str, isolation_level: str | None = None, echo: bool = False):
    kwargs = {"pool_pre_ping": True, "echo": echo}
    if isolation_level:
        kwargs["isolation_level"] = isolation_level
    return create_engine(database_url, **kwargs)


# Process-wide engine; one Session per request is handed out by get_db().
engine = build_engine(
    settings.database_url,
    isolation_level=settings.db_isolation_level,
    echo=settings.db_echo,
)

# expire_on_commit=False keeps returned entities readable after the service commits.
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
