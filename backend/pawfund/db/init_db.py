from pawfund.db.session import engine
from pawfund.db.base import Base

# IMPORTANT: import models so they register with Base.metadata
import pawfund.db.models  # noqa: F401

def init_db() -> None:
    Base.metadata.create_all(bind=engine)
