"""
CUPS Print Service
==================

Printer discovery and job submission through the CUPS command line tools
(``lpstat`` and ``lp``). No native bindings required.

Usage:
    from cups_print_service import Directory, PrintRequest

    directory = Directory()
    for printer in directory.list_printers():
        print(printer.name, printer.is_default)

    job_id = directory.print(PrintRequest(printer='ZPL-PRINTER', data='^XA...^XZ')).result()

Run the HTTP service:
    python -m cups_print_service

API Endpoints:
    GET  /api/printers              - List all printers
    GET  /api/printers/{name}       - Get printer details
    POST /api/printers/{name}/print - Submit print job
"""

__version__ = '1.0.0'
__author__ = 'EGS Software AG'

from .directory import Directory
from .errors import (
    PrintServiceError, ExecutionError, ValidationError, NotFoundError,
    SnapshotError, SubmissionError,
)
from .models import PrinterRecord, PrintRequest, DocumentType, Quality, Orientation

__all__ = [
    'Directory', 'PrinterRecord', 'PrintRequest', 'DocumentType', 'Quality', 'Orientation',
    'PrintServiceError', 'ExecutionError', 'ValidationError', 'NotFoundError',
    'SnapshotError', 'SubmissionError',
]
