from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
import logging

from config import DATABASE_URL

# Configure logging
logger = logging.getLogger(__name__)

# Log the database URL (with password masked for security)
logger.info(f"Database URL is {make_url(DATABASE_URL).render_as_string(hide_password=True)}")


def build_engine(url: str):
    """Create an engine for ``url``.

    SQLite connections are shared across threads; an in-memory SQLite
    database additionally needs a single shared connection.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if make_url(url).database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


# Create SQLAlchemy engine and session
engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# Function to get a database session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Function to create tables
def create_tables(bind=None):
    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database tables: {str(e)}")
        raise
