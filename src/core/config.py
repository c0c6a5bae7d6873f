# recipe_store/src/core/config.py
from __future__ import annotations

import logging
import os
from typing import List

# Mongo settings
MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://127.0.0.1:27017")
MONGO_DB: str = os.getenv("MONGO_DB", "rcp_db")
MONGO_RECIPES_COL: str = os.getenv("MONGO_RECIPES_COL", "recipe")
MONGO_APP_NAME: str = os.getenv("MONGO_APP_NAME", MONGO_DB)
MONGO_TIMEOUT_MS: int = int(os.getenv("MONGO_TIMEOUT_MS", "3000"))

# HTTP settings
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8080"))
CORS_ORIGINS: List[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Global logging (module-level loggers inherit this)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)