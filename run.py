import uvicorn
import logging
from laborpay.main import app # Import the FastAPI app instance from laborpay.main
from laborpay.core.config import ServerConfig # Import ServerConfig

# Configure logging for the main entry point
log_level = getattr(logging, ServerConfig.LOG_LEVEL.upper())
logging.basicConfig(level=log_level)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info(f"Starting HTTP server on port {ServerConfig.PORT}...")
    if ServerConfig.ENABLE_API_DOCS:
        logger.info(f"API Documentation: http://localhost:{ServerConfig.PORT}/docs")
    logger.info(f"Weekly calculation: POST http://localhost:{ServerConfig.PORT}/labor/weekly")

    uvicorn.run(
        app,
        host=ServerConfig.HOST,
        port=ServerConfig.PORT,
        log_level=ServerConfig.LOG_LEVEL.lower(),
        workers=ServerConfig.WORKERS if ServerConfig.WORKERS > 1 else None
    )
