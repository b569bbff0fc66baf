"""
Printer Record Extraction
=========================

Turns a status snapshot into printer records.

Example ``lpstat`` output for one printer::

    $ lpstat -p
    printer HP_LaserJet is idle.  enabled since Mon Dec 18 10:00:00 2023
    $ lpstat -a
    HP_LaserJet accepting requests since Mon Dec 18 10:00:00 2023
    $ lpstat -s
    system default destination: HP_LaserJet
    device for HP_LaserJet: ipp://192.168.1.20/ipp/print
    $ lpstat -d
    system default destination: HP_LaserJet
    $ lpstat -l -p
    printer HP_LaserJet is idle.  enabled since Mon Dec 18 10:00:00 2023
            Form mounted:
            Description: HP LaserJet 4000
            Location: Office 2
"""

import re
from typing import List, Mapping, Optional

from .models import PrinterRecord
from .models.printer import ACCEPTING_JOBS, DEVICE_URI, PRINTER_INFO, PRINTER_LOCATION

# Label prefix in ``lpstat -l -p`` -> option key
DETAIL_LABELS = {
    'Description: ': PRINTER_INFO,
    'Location: ': PRINTER_LOCATION,
}

_BLOCK_START = re.compile(r'^printer ', re.MULTILINE)


def _printer_names(text: str) -> List[str]:
    names = []
    for line in text.splitlines():
        # Indented lines are status/reason text, not headers
        if not line.startswith('printer '):
            continue
        words = line.split()
        if len(words) >= 2 and words[1] not in names:
            names.append(words[1])
    return names


def _device_uri(name: str, text: str) -> str:
    marker = f'{name}: '
    for line in text.splitlines():
        if marker in line:
            return line.split()[-1]
    return ''


def _is_accepting(name: str, text: str) -> bool:
    marker = f'{name} accepting'
    return any(marker in line for line in text.splitlines())


def _detail_block(name: str, text: str) -> Optional[str]:
    marker = f'{name} '
    for block in _BLOCK_START.split(text):
        if marker in block:
            return block
    return None


def _details(name: str, text: str) -> dict:
    block = _detail_block(name, text)
    if block is None:
        return {}

    info = {}
    for line in block.splitlines():
        line = line.strip()
        for label, key in DETAIL_LABELS.items():
            if line.startswith(label):
                info[key] = line[len(label):]
    return info


def extract_printers(snapshot: Mapping[str, str]) -> List[PrinterRecord]:
    """
    Build one record per printer named in the ``printers`` query.

    Args:
        snapshot: Raw query outputs keyed by query name. Missing queries are
            treated as empty output.

    Returns:
        Records in the order printers first appear in the ``printers`` output
    """
    printers_text = snapshot.get('printers') or ''
    default_text = snapshot.get('default') or ''
    addresses_text = snapshot.get('addresses') or ''
    accepting_text = snapshot.get('accepting') or ''
    details_text = snapshot.get('details') or ''

    records = []
    for name in _printer_names(printers_text):
        options = {
            ACCEPTING_JOBS: 'true' if _is_accepting(name, accepting_text) else 'false',
            DEVICE_URI: _device_uri(name, addresses_text),
        }
        options.update(_details(name, details_text))

        records.append(PrinterRecord(
            name=name,
            is_default=name in default_text,
            options=options,
        ))
    return records
