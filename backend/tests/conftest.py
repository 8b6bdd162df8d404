"""Root conftest: shared test configuration."""

import os

# Settings are read at import time by ficai_signals.main; never use real secrets
os.environ.setdefault("FICAI_PWD_PEPPER", "dGVzdC1wZXBwZXItbm90LWZvci1wcm9kdWN0aW9u")
os.environ.setdefault("FICAI_BETA_KEY", "test-beta-key")
os.environ.setdefault("FICAI_PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
os.environ.setdefault(
    "FICAI_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("FICAI_FICHUB_BASE_URL", "http://fichub.test")
