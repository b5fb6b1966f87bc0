# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, asset_engine
from shared.exception_handler import setup_exception_handlers
from .models import asset_types, attribute_definitions, assets, asset_history, lifecycle_transitions, import_jobs
from .router import (
    asset_types_router,
    attribute_definitions_router,
    assets_router,
    lifecycle_router,
    import_router,
    export_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s]: %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables
    Base.metadata.create_all(bind=asset_engine)
    yield


app = FastAPI(title="Asset Register API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
setup_exception_handlers(app)

# Routers
app.include_router(asset_types_router.router)
app.include_router(attribute_definitions_router.router)
app.include_router(assets_router.router)
app.include_router(lifecycle_router.router)
app.include_router(import_router.router)
app.include_router(export_router.router)


@app.get("/api/assets-service/health")
def health():
    return {"status": "healthy"}
