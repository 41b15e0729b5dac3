# app/main.py
from dotenv import load_dotenv

load_dotenv()

import logging
import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config.appconfig import settings

# Apply logging configuration
logging.config.dictConfig(settings.LOGGING_CONFIG)

from app.database.connection import engine, init_models
from app.shared.error_handlers import register_exception_handlers
from app.system_services.system_routes import router as patient_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("===============================================================================")
    logger.info(f" 🚀 Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f" ✅ Database: {engine.url.render_as_string(hide_password=True)}")
    logger.info(f" ✅ Patients API: {settings.API_PREFIX}/patients")
    logger.info("===============================================================================")
    await init_models()
    yield
    # Shutdown
    await engine.dispose()
    logger.info("👋 Shutting down")


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(patient_router, prefix=f"{settings.API_PREFIX}/patients", tags=["Patient Management"])


@app.get("/")
async def root():
    return {"message": f"{settings.APP_NAME} is running"}


@app.get("/health")
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
