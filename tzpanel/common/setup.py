import os
import sys
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create missing directories if missing, and optionally error out when a path
# doesn't exist.
def ensure_directory(path: Path,must_exist=False):
    if must_exist:
        if not path.exists():
            raise FileNotFoundError(f"Required directory is missing: {path}")
        if not path.is_dir():
            raise NotADirectoryError(f"Expected a directory, got a file: {path}")
    else:
        path.mkdir(parents=True,exist_ok=True)
    return path

# Picks the per-user data folder. TZPANEL_DATA_DIR always wins (tests point it at a temp dir), then APPDATA on
# Windows, then a dotfolder in home everywhere else.
def _resolve_data_dir() -> Path:
    override = os.getenv("TZPANEL_DATA_DIR")
    if override:
        return Path(override)
    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if not appdata:
            raise RuntimeError("Missing APPDATA environment variable, cannot determine data directories.")
        return Path(appdata) / "TZPanel"
    return Path.home() / ".tzpanel"

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    root: Path
    data: Path

    logs: Path
    current: Path

    @staticmethod
    def build():
        # Folder of the source checkout / install itself
        root = Path(__file__).resolve().parents[2]

        # Folder for all user-specific stuff
        data = ensure_directory(_resolve_data_dir())

        # Folders within the data folder
        logs = ensure_directory(data / "logs")
        current = ensure_directory(data / "current")

        return ProjectPaths(
            root = root,
            data = data,
            logs = logs,
            current = current,
        )
PATHS = ProjectPaths.build()
