"""
Print Request Model
===================

Describes a job to submit with ``lp``, plus the enumerations that map onto
its option flags.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List, Union

# Opaque identifier taken from the lp confirmation line, e.g. "ZPL-PRINTER-92"
JobHandle = str


class DocumentType(Enum):
    """Document format passed as ``-o <type>``."""

    RAW = 'RAW'
    TEXT = 'TEXT'
    PDF = 'PDF'
    JPEG = 'JPEG'
    POSTSCRIPT = 'POSTSCRIPT'
    COMMAND = 'COMMAND'
    AUTO = 'AUTO'

    @property
    def flag(self) -> str:
        return self.value.lower()

    @classmethod
    def coerce(cls, value: Union['DocumentType', str, None]) -> 'DocumentType':
        if value is None or value == '':
            return cls.RAW
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(f'Invalid document type: {value!r}') from None


class _IppEnum(Enum):
    """Enum whose flag value is the IPP integer."""

    @property
    def flag(self) -> str:
        return str(self.value)

    @classmethod
    def coerce(cls, value):
        if value is None or value == '':
            return None
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            if value.upper() in cls.__members__:
                return cls[value.upper()]
            if value.isdigit():
                value = int(value)
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f'Invalid {cls.__name__.lower()}: {value!r}') from None


class Quality(_IppEnum):
    """IPP print-quality."""

    DRAFT = 3
    NORMAL = 4
    HIGH = 5


class Orientation(_IppEnum):
    """IPP orientation-requested."""

    PORTRAIT = 3
    LANDSCAPE = 4
    REVERSE_LANDSCAPE = 5
    REVERSE_PORTRAIT = 6


def _as_bool(value) -> bool:
    """JSON boolean, or one of the usual true/false strings."""
    if value is None or value == '':
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in _BOOL_STRINGS:
        return _BOOL_STRINGS[value.lower()]
    raise ValueError(f'Invalid boolean: {value!r}')


_BOOL_STRINGS = {
    'true': True, 'yes': True, '1': True, 'on': True,
    'false': False, 'no': False, '0': False, 'off': False,
}


@dataclass
class PrintRequest:
    """Print job parameters."""

    # Target
    printer: str = ""

    # Content: exactly one of data / file
    data: Optional[Union[str, bytes]] = None
    file: Optional[str] = None
    type: DocumentType = DocumentType.RAW

    # Server
    host: Optional[str] = None
    port: Optional[int] = None
    username: Optional[str] = None
    encryption: bool = False

    # Formatting
    title: Optional[str] = None
    quality: Optional[Quality] = None
    orientation: Optional[Orientation] = None
    copies: Optional[int] = None

    # Extra raw lp arguments, emitted before the generated ones
    args: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.type = DocumentType.coerce(self.type)
        self.quality = Quality.coerce(self.quality)
        self.orientation = Orientation.coerce(self.orientation)
        self.args = list(self.args or [])

    @property
    def destination_host(self) -> Optional[str]:
        """``host`` or ``host:port``, None without a host."""
        if not self.host:
            return None
        if self.port:
            return f'{self.host}:{self.port}'
        return self.host

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PrintRequest':
        """Create from a JSON body."""
        copies = data.get('copies')
        port = data.get('port')
        return cls(
            printer=data.get('printer', ''),
            data=data.get('data'),
            file=data.get('file'),
            type=data.get('type'),
            host=data.get('host'),
            port=int(port) if port else None,
            username=data.get('username'),
            encryption=_as_bool(data.get('encryption')),
            title=data.get('title'),
            quality=data.get('quality'),
            orientation=data.get('orientation'),
            copies=int(copies) if copies else None,
            args=data.get('args') or [],
        )
