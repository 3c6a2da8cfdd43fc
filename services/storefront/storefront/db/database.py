from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from storefront.config import settings
from alembic import command
from alembic.config import Config
import asyncio
import logging
import os

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    """Pool and connect options; SQLite (local runs) takes none of them"""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
        "connect_args": {
            "connect_timeout": 5,  # 5 second connection timeout
        },
        "pool_timeout": 10,  # 10 second timeout for getting a connection from pool
    }


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency for getting database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_database_connection(db: Session) -> bool:
    """Return True if the database answers a trivial query"""
    try:
        db.execute(text("SELECT 1")).fetchone()
        return True
    except Exception as e:
        logger.warning(f"Database connection check failed: {e}")
        return False


async def wait_for_database(max_retries=30, retry_delay=2):
    """Wait for database to be available with retry logic"""
    db_url_display = settings.database_url
    if '@' in db_url_display:
        db_url_display = db_url_display.split('@')[-1]

    logger.info(f"Waiting for database connection to {db_url_display}...")

    for attempt in range(1, max_retries + 1):
        try:
            test_engine = create_engine(settings.database_url, **_engine_options(settings.database_url))
            with test_engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            test_engine.dispose()
            logger.info("Database connection successful")
            return True
        except Exception as e:
            if attempt < max_retries:
                logger.warning(f"Database connection attempt {attempt}/{max_retries} failed: {e}. Retrying in {retry_delay}s...")
                await asyncio.sleep(retry_delay)
            else:
                logger.error(f"Database connection failed after {max_retries} attempts: {e}")
                raise
    return False


def find_alembic_ini() -> str:
    """Locate alembic.ini in the working directory or next to the package"""
    alembic_ini_path = "alembic.ini"
    if os.path.exists(alembic_ini_path):
        return alembic_ini_path

    # services/storefront/storefront/db/database.py -> services/storefront/alembic.ini
    file_dir = os.path.dirname(os.path.abspath(__file__))
    service_root = os.path.dirname(os.path.dirname(file_dir))
    alembic_ini_path = os.path.join(service_root, "alembic.ini")
    if os.path.exists(alembic_ini_path):
        return alembic_ini_path

    raise FileNotFoundError(
        f"Could not find alembic.ini. Current directory: {os.getcwd()}, "
        f"Tried: alembic.ini and {alembic_ini_path}"
    )


async def init_db():
    """Initialize database by running Alembic migrations"""
    logger.info("Running database migrations...")

    await wait_for_database(max_retries=30, retry_delay=2)

    alembic_ini_path = find_alembic_ini()
    logger.info(f"Using Alembic config: {os.path.abspath(alembic_ini_path)}")

    alembic_cfg = Config(alembic_ini_path)
    alembic_cfg.set_main_option("script_location", os.path.join(os.path.dirname(os.path.abspath(alembic_ini_path)), "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url.replace("%", "%%"))
    alembic_cfg.attributes["configure_logger"] = False

    logger.info("Starting Alembic migration to head...")
    try:
        # Run in a worker thread to avoid blocking the event loop
        await asyncio.wait_for(
            asyncio.to_thread(command.upgrade, alembic_cfg, "head"),
            timeout=60.0
        )
    except asyncio.TimeoutError:
        logger.error("Database migrations timed out after 60 seconds")
        raise
    except Exception as e:
        logger.error(f"Migration error: {e}", exc_info=True)
        raise

    logger.info("Database migrations completed successfully")
