import os
import tempfile

# Keep logs and preferences written during tests out of the real user folder, and let Qt run without a display.
# Must happen before anything imports tzpanel.
os.environ.setdefault("TZPANEL_DATA_DIR", tempfile.mkdtemp(prefix="tzpanel-tests-"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
