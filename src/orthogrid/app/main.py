"""
Run with: python -m orthogrid
"""
from __future__ import annotations

import sys

from orthogrid.app.application import create_app
from orthogrid.app.ui.main_window import MainWindow
from orthogrid.logging_config import settings_from_env, setup_logging


def main() -> int:
    """Main entry point for the application."""
    setup_logging(*settings_from_env())
    app = create_app()
    win = MainWindow()
    win.show()
    return app.exec()

if __name__ == "__main__":
    sys.exit(main())
