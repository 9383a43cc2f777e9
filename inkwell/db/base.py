from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from inkwell.settings import settings

engine = create_engine(settings.postgres_url, future=True, echo=False)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    # Import models so their tables are registered on Base.metadata
    from inkwell.models import subscription  # noqa: F401

    Base.metadata.create_all(bind=engine)
