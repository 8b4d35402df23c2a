"""Application entry point and setup for the Lyric Type typing game."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from lyrictype.api.client import LyricTypeClient
from lyrictype.config import load_settings
from lyrictype.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="lyrictype", description="Practice typing with song lyrics.")
    parser.add_argument("song_id", nargs="?", help="Spotify id of a song to open directly")
    parser.add_argument("--config", type=Path, default=None, help="path to config.yaml")
    return parser.parse_args(argv)


def run(argv: Optional[List[str]] = None) -> None:
    """Initialize the application, load settings, and start the main window."""
    configure_logging()
    args = parse_args(argv)
    settings = load_settings(args.config)
    logging.info("Using backend %s (user: %s)", settings.api_url, settings.user_id or "anonymous")

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Lyric Type")
    app.setApplicationDisplayName("Lyric Type")

    client = LyricTypeClient.from_settings(settings)
    window = MainWindow(client, settings, song_id=args.song_id)
    window.resize(960, 720)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
