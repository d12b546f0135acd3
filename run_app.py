#!/usr/bin/env python3
"""
Simple runner script for the Flask application.
This script ensures the correct Python path is set and runs the app.
"""

import sys
from pathlib import Path

# Add the current directory to Python path
current_dir = Path(__file__).parent
sys.path.insert(0, str(current_dir))

from app.main import create_app
from config_manager import get_app_config

if __name__ == "__main__":
    print("🚀 Starting related posts service...")
    print(f"📁 Working directory: {current_dir}")

    app_config = get_app_config()
    app = create_app()

    app.run(
        host=app_config.host,
        port=app_config.port,
        debug=app_config.debug
    )
