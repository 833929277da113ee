import os
import tempfile

# Keep the attempt log out of the working tree; config reads this at import.
os.environ.setdefault("TT_LOG_DIR", tempfile.mkdtemp(prefix="tt-logs-"))
