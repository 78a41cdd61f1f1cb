import logging
import os
from pathlib import Path
from logging.handlers import RotatingFileHandler
from tzpanel.common.setup import PATHS
from datetime import datetime

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attaches the given handler under handler_name, unless the logger already carries one by that name. Keeps repeated
# get_logger() calls from stacking duplicate handlers.
def _attach(logger: logging.Logger, handler: logging.Handler, handler_name: str, level: int, fmt: logging.Formatter):
    if any(h.get_name() == handler_name for h in logger.handlers):
        handler.close()
        return
    handler.setLevel(level)
    handler.setFormatter(fmt)
    handler.set_name(handler_name)
    logger.addHandler(handler)

# Removes all but the newest `keep` per-run debug logs.
def _prune_run_logs(run_dir: Path, name: str, keep: int):
    runs = sorted(run_dir.glob(f"{name}_*.log"),key=lambda p: p.stat().st_mtime,reverse=True)
    for run in runs[keep:]:
        try: run.unlink()
        except OSError: pass

def get_logger(
        name = "tzpanel",
        level = logging.INFO,
        log_dir: Path | None = None,
        max_bytes = 2 * 1024 * 1024,
        backup_count = 3,
        persistent = True,
        console = False,
        run_logs: int = 5
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(min(level, logging.DEBUG) if run_logs > 0 else level)

    log_dir = log_dir or PATHS.logs
    log_dir.mkdir(parents=True,exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT,LOG_DATE_FORMAT)

    # Rotating log that survives across runs
    if persistent and not any(h.get_name() == f"{name}:persistent" for h in logger.handlers):
        _attach(logger, RotatingFileHandler(log_dir / f"{name}.log", maxBytes=max_bytes,
                                            backupCount=backup_count, encoding="utf-8"),
                f"{name}:persistent", level, fmt)

    # Only the current run, overwritten on each start
    if not any(h.get_name() == f"{name}:latest" for h in logger.handlers):
        _attach(logger, logging.FileHandler(log_dir / "latest.log", mode="w", encoding="utf-8"),
                f"{name}:latest", level, fmt)

    # One full debug log per run, capped at run_logs files
    if run_logs > 0 and not any(h.get_name() == f"{name}:run" for h in logger.handlers):
        run_dir = log_dir / "runs"
        run_dir.mkdir(parents=True,exist_ok=True)
        run_path = run_dir / f"{name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
        _attach(logger, logging.FileHandler(run_path, encoding="utf-8"), f"{name}:run", logging.DEBUG, fmt)
        _prune_run_logs(run_dir, name, run_logs)

    if console:
        _attach(logger, logging.StreamHandler(), f"{name}:console", level, fmt)

    return logger

# TZPANEL_LOG_LEVEL takes a level name (DEBUG, INFO, ...), TZPANEL_LOG_CONSOLE=1 mirrors the log to stderr.
_level = logging.getLevelName(os.getenv("TZPANEL_LOG_LEVEL", "INFO").upper())
log = get_logger(level=_level if isinstance(_level, int) else logging.INFO,
                 console=os.getenv("TZPANEL_LOG_CONSOLE") == "1")
log.info("=== tzpanel session started ===")
