"""
Run the Medicinal Diet Assistant REST API.

Usage:
    python run_api.py

Environment variables:
    LLM_API_URL         Chat-completions endpoint (required)
    LLM_API_KEY         Bearer token for the endpoint (required)
    LLM_MODEL           Model name (default: deepseek-chat)
    LLM_TEMPERATURE     Sampling temperature (default: 0.5)
    LLM_MAX_TOKENS      Max output tokens (default: 1500)
    LLM_TIMEOUT_SECONDS Request timeout (default: 30)
    PROMPT_LOCALE       "en" or "zh" (default: en)
    DB_PATH             SQLite database file path (default: medicinal_diet.db)
    JWT_SECRET          Secret key for signing JWT tokens (change in production!)
    JWT_EXPIRY_HOURS    Token lifetime in hours (default: 24)
    LOG_LEVEL           Logging level (default: INFO)
"""

import logging
import sys
from pathlib import Path

# Ensure src/ is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

import uvicorn

from infrastructure.config import Settings

if __name__ == "__main__":
    logging.basicConfig(
        level=Settings.from_env().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "adapters.rest.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
