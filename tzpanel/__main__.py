import sys
from tzpanel.common.logger import log
from tzpanel.ui.app import main

# Entry point for `python -m tzpanel`
def run() -> None:
    try:
        main()
    except SystemExit:
        raise
    except Exception:
        # Full stack trace, always
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)

if __name__ == "__main__":
    run()
