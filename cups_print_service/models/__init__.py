"""
CUPS Print Service Models
"""

from .printer import PrinterRecord
from .job import PrintRequest, DocumentType, Quality, Orientation, JobHandle

__all__ = ['PrinterRecord', 'PrintRequest', 'DocumentType', 'Quality', 'Orientation', 'JobHandle']
