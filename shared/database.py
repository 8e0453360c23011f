# ============================================================================
# shared/database.py - Engines and sessions for the event log and lookup table
# ============================================================================

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import logging

from config import DATABASE_URL, DATABASE_ECHO, ROUTING_DATABASE_URL

logger = logging.getLogger(__name__)


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine with settings suited to the database type"""
    if url.startswith("sqlite"):
        # In-memory databases must share one connection across threads
        if url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool
            )
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False}
        )
    elif url.startswith("mysql"):
        # MySQL configuration with sync driver
        return create_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
            pool_recycle=300,
            pool_size=5,
            max_overflow=0
        )
    return create_engine(url, echo=echo)


# Event log (owned tables)
engine = build_engine(DATABASE_URL, DATABASE_ECHO)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# Routing lookup table (external, read-only)
lookup_engine = build_engine(ROUTING_DATABASE_URL, DATABASE_ECHO)
LookupSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=lookup_engine)
LookupBase = declarative_base()


def import_models():
    """Import all models to ensure they are included in Base.metadata"""
    try:
        from apps.call_routing import models  # noqa: F401
        logger.info("Call routing models imported successfully")
    except ImportError as e:
        logger.warning(f"Could not import call routing models: {e}")


def check_connection(bind: Engine) -> bool:
    """Run a trivial query against an engine"""
    try:
        with bind.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed for {bind.url}: {e}")
        return False


def init_database(bind: Engine = None) -> bool:
    """Initialize the database and create the event log tables"""
    bind = bind or engine
    try:
        import_models()

        with bind.connect():
            logger.info("Database connection successful")

        Base.metadata.create_all(bind=bind)
        logger.info("Database tables created/verified")
        return True

    except Exception as e:
        logger.error(f"Database initialization error: {str(e)}")
        return False


def init_lookup_table(bind: Engine = None) -> bool:
    """Create the routing lookup table if it does not exist yet"""
    bind = bind or lookup_engine
    try:
        import_models()
        LookupBase.metadata.create_all(bind=bind)
        logger.info("Routing lookup table created/verified")
        return True
    except Exception as e:
        logger.error(f"Routing lookup table initialization error: {str(e)}")
        return False
