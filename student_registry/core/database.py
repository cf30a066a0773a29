from typing import Any, Dict, Generator
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool
from .config import settings, masked_database_url
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# DATABASE ENGINE CONFIGURATION
# =============================================================================


def engine_options(url: str) -> Dict[str, Any]:
    """
    Keyword arguments for create_engine().

    Server databases get a QueuePool sized from settings and a connect
    timeout. SQLite keeps the driver defaults, it accepts neither.
    """
    options: Dict[str, Any] = {"echo": settings.DB_ECHO_SQL}
    if url.startswith("sqlite"):
        return options

    options.update(
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,  # Number of connections to keep open
        max_overflow=settings.DB_MAX_OVERFLOW,  # Max connections beyond pool_size
        pool_timeout=settings.DB_POOL_TIMEOUT,  # Seconds to wait for a pooled connection
        pool_recycle=settings.DB_POOL_RECYCLE,  # Recycle connections after N seconds
        pool_pre_ping=True,  # Detect dropped connections before use
        connect_args={"connect_timeout": settings.DB_CONNECT_TIMEOUT},
    )
    return options


def build_engine(url: str) -> Engine:
    """Create an engine for ``url`` and attach the pool debug listeners."""
    new_engine = create_engine(url, **engine_options(url))
    event.listen(new_engine, "connect", _on_connect)
    event.listen(new_engine, "checkout", _on_checkout)
    event.listen(new_engine, "checkin", _on_checkin)
    return new_engine


# =============================================================================
# EVENT LISTENERS
# =============================================================================

def _on_connect(dbapi_conn, connection_record):
    if settings.DEBUG:
        logger.debug("New database connection established")


def _on_checkout(dbapi_conn, connection_record, connection_proxy):
    if settings.DEBUG:
        logger.debug("Connection checked out from pool")


def _on_checkin(dbapi_conn, connection_record):
    if settings.DEBUG:
        logger.debug("Connection returned to pool")


engine = build_engine(settings.DATABASE_URL)


# =============================================================================
# SESSION CONFIGURATION
# =============================================================================

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False  # Rows stay readable after the session commits
)

Base = declarative_base()


# =============================================================================
# DATABASE SESSION DEPENDENCY
# =============================================================================

def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI endpoints.

    Usage in endpoints:
        @router.get("/students/")
        def list_students(db: Session = Depends(get_db)):
            ...

    The session is closed after the request whether the endpoint returned
    or raised, so its connection always goes back to the pool.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# DATABASE UTILITIES
# =============================================================================

def create_database_tables(bind: Engine = engine):
    """
    Create all database tables defined in models.

    Development only; the production schema is managed outside this service.
    """
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables created successfully")


def drop_database_tables(bind: Engine = engine):
    """
    Drop all database tables.

    This deletes all data. Only use in development/testing.
    """
    logger.warning("Dropping all database tables...")
    Base.metadata.drop_all(bind=bind)
    logger.info("Database tables dropped")


def check_database_connection(bind: Engine = engine) -> bool:
    """
    Check if database connection is working.

    Returns:
        bool: True if connection successful, False otherwise
    """
    try:
        with bind.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.debug("Database connection successful")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


# =============================================================================
# TEST DATABASE CONNECTION
# =============================================================================

if __name__ == "__main__":
    """Test database connection when running this file directly."""
    logging.basicConfig(level=logging.INFO)

    print("\n" + "=" * 80)
    print("TESTING DATABASE CONNECTION")
    print("=" * 80)
    print(f"Database URL: {masked_database_url()}")

    if check_database_connection():
        print("Connection successful!")
    else:
        print("Connection failed!")

    print("=" * 80 + "\n")
