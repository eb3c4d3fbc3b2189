#!/usr/bin/env python
"""Script to run the TaskFlow API server."""
import os
import sys
from pathlib import Path

# Get the directory where this script is located
project_dir = Path(__file__).resolve().parent

# Add project directory to Python path
sys.path.insert(0, str(project_dir))

# Change to project directory so the default SQLite file lands here
os.chdir(project_dir)

# Now run uvicorn
import uvicorn

from taskflow.config import LOG_LEVEL, PORT
from taskflow.logging_setup import setup_logging

if __name__ == "__main__":
    setup_logging(level=LOG_LEVEL)
    uvicorn.run(
        "taskflow.main:app",
        host="0.0.0.0",
        port=PORT,
        reload=True,
        log_config=None,
    )
