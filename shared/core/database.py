from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from shared.core.config import ASSET_DATABASE_URL

Base = declarative_base()

POOL_SIZE = 2
MAX_OVERFLOW = 2


def engine_options(url: str) -> dict:
    # SQLite engines use a single-connection pool and reject pool sizing
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": POOL_SIZE,          # max idle connections
        "max_overflow": MAX_OVERFLOW,    # max temporary extra connections
        "pool_timeout": 30,              # wait time before failing
    }


# Asset DB
asset_engine = create_engine(
    ASSET_DATABASE_URL, **engine_options(ASSET_DATABASE_URL))
AssetSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=asset_engine)


# Dependency
def get_asset_db():
    db = AssetSessionLocal()
    try:
        yield db
    finally:
        db.close()
