import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from laborpay.core.config import LaborConfig, ServerConfig
from laborpay.core.errors import ConfigurationError
from laborpay.services.calendar_service import get_holiday_calendar
from laborpay.api.endpoints import general, labor, calendar

# Configure logging
log_level = getattr(logging, ServerConfig.LOG_LEVEL.upper())
logging.basicConfig(level=log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic
    logger.info("=" * 60)
    logger.info(f"{ServerConfig.APP_NAME.upper()}")
    logger.info(f"Version: {ServerConfig.APP_VERSION}")
    logger.info("=" * 60)

    try:
        holiday_calendar = get_holiday_calendar()
        logger.info(f"Holiday calendar: {holiday_calendar.name}")
    except ConfigurationError as e:
        logger.error(f"Invalid HOLIDAY_CALENDAR setting: {e}")
        raise

    logger.info(f"Max shifts per request: {LaborConfig.MAX_SHIFTS_PER_REQUEST}")
    logger.info(f"Calculation logging: {'ENABLED' if LaborConfig.LOG_CALCULATIONS else 'DISABLED'}")
    logger.info("=" * 60)
    logger.info("Labor pay server started successfully!")

    yield  # Server is running

    # Shutdown logic
    logger.info("Shutting down labor pay server...")


app = FastAPI(
    title=ServerConfig.APP_NAME,
    version=ServerConfig.APP_VERSION,
    description=ServerConfig.APP_DESCRIPTION,
    lifespan=lifespan,
    docs_url="/docs" if ServerConfig.ENABLE_API_DOCS else None,
    redoc_url="/redoc" if ServerConfig.ENABLE_API_DOCS else None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=ServerConfig.CORS_ORIGINS,
    allow_credentials=ServerConfig.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(general.router, tags=["General"])
app.include_router(labor.router, tags=["Labor"])
app.include_router(calendar.router, tags=["Calendar"])
