"""Development server entry point for the floor layout HTTP API."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from floorgen import create_app

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(log_dir: str, level=logging.INFO) -> str:
    """Route stdlib logging to the console and a rotating file under `log_dir`.

    Safe to call repeatedly: existing root handlers are replaced, not stacked.
    Returns the log file path.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "floorgen.log")

    root = logging.getLogger()
    root.setLevel(level)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(LOG_FORMAT))

    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    app = create_app()
    configure_logging(app.instance_path)
    try:
        print(f"[INFO] Starting floor layout API on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)
