"""
Printer Model
=============

Represents a printer as reported by the CUPS status tools.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any

# Option keys
ACCEPTING_JOBS = 'printer-is-accepting-jobs'
DEVICE_URI = 'device-uri'
PRINTER_INFO = 'printer-info'
PRINTER_LOCATION = 'printer-location'


@dataclass
class PrinterRecord:
    """Printer name, default flag and status options."""

    name: str = ""
    is_default: bool = False

    # Ordered; always holds ACCEPTING_JOBS ("true"/"false") and DEVICE_URI
    options: Dict[str, str] = field(default_factory=dict)

    @property
    def is_accepting_jobs(self) -> bool:
        return self.options.get(ACCEPTING_JOBS) == 'true'

    @property
    def device_uri(self) -> str:
        return self.options.get(DEVICE_URI, '')

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PrinterRecord':
        """Create from dictionary."""
        return cls(
            name=data.get('name', ''),
            is_default=bool(data.get('is_default', False)),
            options=dict(data.get('options') or {}),
        )
