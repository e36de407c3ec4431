"""
Run the Medicinal Diet Assistant CLI.

Usage:
    python run_cli.py [COMMAND] [OPTIONS]

Commands:
    register   Create a new account
    login      Sign in and save credentials locally (~/.medicinal-diet/session.json)
    logout     Clear stored credentials
    whoami     Show the currently logged-in user
    recommend  Answer a health questionnaire and get a medicinal diet (requires login)
    init-db    Create the database tables

Examples:
    python run_cli.py login
    python run_cli.py recommend

Environment variables: see run_api.py. LLM_API_URL and LLM_API_KEY are
only needed for `recommend`.
"""

import logging
import sys
from pathlib import Path

# Ensure src/ is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

from adapters.cli.main import app
from infrastructure.config import Settings

if __name__ == "__main__":
    # CLI output goes through rich; only warnings and errors are logged.
    level = Settings.from_env().log_level.upper()
    logging.basicConfig(level=level if level in ("ERROR", "CRITICAL") else "WARNING")
    app()
