from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.routers import api_router
from app.core.config import settings
from app.core.error_handlers import register_exception_handlers
from app.core.logging import logger
from app.db.session import engine, init_models


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.engine = engine
    app.state.models_initialized = False
    if settings.AUTO_CREATE_TABLES:
        # dev only, production relies on alembic migrations
        init_models(engine)
        app.state.models_initialized = True
    logger.info("%s started", settings.PROJECT_NAME)
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_V1_PREFIX)
