import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


# =============================================================================
# DATABASE ENGINE CONFIGURATION
# =============================================================================

def create_db_engine(storage_path: str, echo: bool = False) -> Engine:
    """
    Create the engine for the SQLite file at ``storage_path``.

    The file is created on first connection if it does not exist.
    Connections are pooled and shared between request threads.
    """
    engine = create_engine(
        f"sqlite:///{storage_path}",
        # Connections are handed to whichever worker thread serves the request
        connect_args={"check_same_thread": False},
        # Test connection before using (detect disconnects)
        pool_pre_ping=True,
        # Print all SQL queries to console
        echo=echo,
    )

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_conn, connection_record):
        logger.debug("New database connection established")

    return engine


# =============================================================================
# SESSION CONFIGURATION
# =============================================================================

def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,  # Don't auto-commit transactions
        autoflush=False,   # Don't auto-flush before queries
        bind=engine,
        expire_on_commit=False  # Don't expire objects after commit
    )


# =============================================================================
# DATABASE UTILITIES
# =============================================================================

def create_database_tables(engine: Engine) -> None:
    """Create every table defined in models that does not exist yet."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


def check_database_connection(engine: Engine) -> None:
    """
    Run a trivial query against the store.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: the store cannot be reached
    """
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    logger.debug("Database connection successful")
