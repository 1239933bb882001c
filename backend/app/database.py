from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy import create_engine

from app.config import settings

# Initialize Base class for declarative models
Base = declarative_base()

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

connect_args = {}
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False  # Needed for SQLite

# Create engine instance
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True,
)

# Create sessionmaker
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# Export these for use in other modules
__all__ = ['Base', 'SessionLocal', 'engine', 'get_db']

def get_db():
    """One session per request, closed whether the request succeeds or not."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
