"""
CUPS Print Service Configuration
"""

import os

# =============================================================================
# Server Configuration
# =============================================================================

PORT = int(os.environ.get('CUPS_PRINT_PORT', 5100))
HOST = os.environ.get('CUPS_PRINT_HOST', '0.0.0.0')
DEBUG = os.environ.get('CUPS_PRINT_DEBUG', 'false').lower() == 'true'

# API Key for authentication
API_KEY = os.environ.get('CUPS_PRINT_API_KEY', 'cups-print-2026')

LOG_LEVEL = os.environ.get('CUPS_PRINT_LOG_LEVEL', 'INFO').upper()

# =============================================================================
# CUPS Commands
# =============================================================================

# Status queries (lpstat -p, -a, -s, -d, -l -p)
LPSTAT_COMMAND = os.environ.get('CUPS_LPSTAT_COMMAND', 'lpstat')

# Job submission
LP_COMMAND = os.environ.get('CUPS_LP_COMMAND', 'lp')

# =============================================================================
# Printer Directory
# =============================================================================

# Auto-refresh interval in milliseconds (0 disables it for the HTTP service)
REFRESH_INTERVAL_MS = int(os.environ.get('CUPS_REFRESH_INTERVAL_MS', 15000))

# Worker threads used for asynchronous command runs
RUNNER_WORKERS = int(os.environ.get('CUPS_RUNNER_WORKERS', 8))
