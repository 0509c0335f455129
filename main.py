#!/usr/bin/env python3
"""
Art Club Admin - Main entry point
"""
import argparse
import logging
import os
import sys

# Add the parent directory to sys.path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from simple_logger import Slogger
from artclub_admin.config import load_config
from artclub_admin.ui.app import AdminApp, SCREEN_KEYS


def setup_logging(config):
    """File logging only; the terminal belongs to the TUI."""
    log_cfg = config.get("logging", {})
    path = log_cfg.get("path", "logs/artclub_admin.log")
    level = str(log_cfg.get("level", "INFO")).upper()

    log_dir = os.path.dirname(path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.FileHandler(path, encoding="utf-8")],
    )
    Slogger.configure(path, level)


def main():
    parser = argparse.ArgumentParser(description="Art Club admin console")
    parser.add_argument(
        "--screen",
        choices=sorted(SCREEN_KEYS.values()),
        default="artworks",
        help="Screen to open first",
    )
    parser.add_argument("--config", help="Path to a JSON config file")
    args = parser.parse_args()

    # Load configuration
    config = load_config(args.config)
    setup_logging(config)

    Slogger.log("Starting Art Club admin console...")

    app = AdminApp(config, start=args.screen)
    app.run()


if __name__ == "__main__":
    main()
