# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Test environment; this must happen before app settings are imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_TO_FILE"] = "false"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"
