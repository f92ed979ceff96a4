import os
import tempfile
from pathlib import Path

# Must run before app.config is imported by any test module.
_DB_DIR = Path(tempfile.mkdtemp(prefix="career-api-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR / 'test.db'}"
os.environ["LLM_ENABLED"] = "false"
