
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

def parse_list_env(env_var: str, default: List[str] = None) -> List[str]:
    """Parse comma-separated environment variable into list"""
    if default is None:
        default = []

    value = os.getenv(env_var, "")
    if not value.strip():
        return default

    # Split by comma and strip whitespace
    return [item.strip() for item in value.split(",") if item.strip()]

def parse_bool_env(env_var: str, default: bool = False) -> bool:
    """Parse boolean environment variable"""
    return os.getenv(env_var, str(default)).lower() in ("true", "1", "yes", "on")

class LaborConfig:
    """Labor calculation settings from Environment"""

    # Which holiday calendar backs is_holiday(): "static" (literal 2024 list) or "computed"
    HOLIDAY_CALENDAR = os.getenv("HOLIDAY_CALENDAR", "static").strip().lower()

    # Log an INFO line with the totals of every weekly calculation
    LOG_CALCULATIONS = parse_bool_env("LOG_CALCULATIONS", True)

    # Upper bound on shifts accepted by a single weekly request
    MAX_SHIFTS_PER_REQUEST = int(os.getenv("MAX_SHIFTS_PER_REQUEST", "62"))

class ServerConfig:
    """Server Configuration from Environment"""

    # Server settings
    HOST = os.getenv("LABORPAY_HOST", "0.0.0.0")
    PORT = int(os.getenv("LABORPAY_PORT", "8000"))
    WORKERS = int(os.getenv("LABORPAY_WORKERS", "1"))
    LOG_LEVEL = os.getenv("LABORPAY_LOG_LEVEL", "info")

    # Development settings
    ENABLE_API_DOCS = parse_bool_env("ENABLE_API_DOCS", True)

    # CORS settings
    CORS_ORIGINS = parse_list_env("CORS_ORIGINS", ["*"])
    CORS_ALLOW_CREDENTIALS = parse_bool_env("CORS_ALLOW_CREDENTIALS", True)

    # App metadata
    APP_NAME = os.getenv("APP_NAME", "Labor Pay Calculator")
    APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
    APP_DESCRIPTION = os.getenv("APP_DESCRIPTION", "Colombian overtime, night, Sunday and holiday surcharge calculator")
