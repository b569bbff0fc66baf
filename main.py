#!/usr/bin/env python
"""
CUPS Print Service - Standalone Entry Point

Run directly:
    python main.py

Or with environment variables:
    CUPS_PRINT_PORT=5200 CUPS_REFRESH_INTERVAL_MS=30000 python main.py
"""

import os
import sys

# Ensure package is importable when running directly
if __name__ == '__main__':
    project_dir = os.path.dirname(os.path.abspath(__file__))
    if project_dir not in sys.path:
        sys.path.insert(0, project_dir)

from cups_print_service.app import main


if __name__ == '__main__':
    main()
