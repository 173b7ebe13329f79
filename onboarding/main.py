"""Bank Onboarding API - Main Application."""
from fastapi import FastAPI
from contextlib import asynccontextmanager
import asyncio
import logging

from onboarding.core.config import settings
from onboarding.logging_hardening import setup_logging_redaction
from onboarding.api.applications import router as applications_router
from onboarding.routers import health

logger = logging.getLogger(__name__)

# Initialize logging redaction filters early
setup_logging_redaction(settings.LOG_LEVEL)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: resolve the master key once so a missing or unreadable key
    # file fails fast instead of on the first submission.
    from onboarding.dependencies import get_master_key_provider
    await asyncio.to_thread(get_master_key_provider().get)
    logger.info("Encryption master key resolved.")
    yield
    logger.info("Shutdown complete.")

app = FastAPI(
    title="Bank Onboarding API",
    description="Account-opening applications with field-level encryption",
    version="0.1.0",
    lifespan=lifespan
)

app.include_router(applications_router.router, prefix="/api", tags=["Applications"])
app.include_router(health.router, tags=["Health"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("onboarding.main:app", host="0.0.0.0", port=3001, reload=False)
