"""Global test fixtures."""

import os

# Keep logfire quiet when authorize() opens spans without logfire.configure()
# This must happen at module load time, not in a fixture
os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")
