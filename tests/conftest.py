"""Root conftest: shared test configuration."""

import os

# Keep tests off any real database and in a non-production mode
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")
