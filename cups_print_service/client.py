"""
CUPS Print Service Client
=========================

Python SDK for interacting with CUPS Print Service.

Usage:
    from cups_print_service.client import PrintClient

    client = PrintClient('http://localhost:5100', api_key='your-key')

    # List printers
    printers = client.list_printers()

    # Print raw ZPL
    result = client.print_text('ZPL-PRINTER', '^XA^FO50,50^FDHello^FS^XZ')

    # Print a PDF
    with open('report.pdf', 'rb') as f:
        result = client.print_data('Office', f.read(), type='PDF', copies=2)
"""

import base64
from urllib.parse import quote
import requests
from typing import Dict, Any, Optional, List


class PrintClient:
    """Client for CUPS Print Service."""

    def __init__(self, base_url: str = 'http://localhost:5100', api_key: str = None):
        """
        Initialize client.

        Args:
            base_url: Base URL of the print service
            api_key: API key for authentication
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key

    def _headers(self) -> Dict[str, str]:
        """Get request headers."""
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def _request(self, method: str, endpoint: str, data: Dict = None) -> Dict[str, Any]:
        """Make API request."""
        url = f'{self.base_url}{endpoint}'

        try:
            if method == 'GET':
                response = requests.get(url, headers=self._headers(), timeout=30)
            elif method == 'POST':
                response = requests.post(url, json=data, headers=self._headers(), timeout=60)
            else:
                raise ValueError(f'Unknown method: {method}')

            return response.json()

        except requests.exceptions.Timeout:
            return {'success': False, 'error': 'Request timeout'}
        except requests.exceptions.ConnectionError:
            return {'success': False, 'error': f'Cannot connect to {self.base_url}'}
        except ValueError as e:
            return {'success': False, 'error': str(e)}

    # =========================================================================
    # Health
    # =========================================================================

    def health(self) -> Dict[str, Any]:
        """Check service health."""
        return self._request('GET', '/health')

    def is_online(self) -> bool:
        """Check if service is online."""
        result = self.health()
        return result.get('status') == 'online'

    # =========================================================================
    # Printers
    # =========================================================================

    def list_printers(self) -> List[Dict[str, Any]]:
        """List all printers."""
        result = self._request('GET', '/api/printers')
        return result.get('printers', [])

    def get_printer(self, name: str) -> Optional[Dict[str, Any]]:
        """Get printer by name."""
        result = self._request('GET', f'/api/printers/{quote(name)}')
        return result.get('printer') if result.get('success') else None

    # =========================================================================
    # Printing
    # =========================================================================

    def print_data(self, printer: str, data: bytes, **options) -> Dict[str, Any]:
        """
        Print raw bytes.

        Args:
            printer: Target printer name
            data: Payload (sent base64 encoded)
            **options: type, copies, title, quality, orientation, host, port,
                username, encryption, options ({key: value} lp options)
        """
        body = {
            'data_base64': base64.b64encode(data).decode('utf-8'),
            **options,
        }
        return self._request('POST', f'/api/printers/{quote(printer)}/print', body)

    def print_text(self, printer: str, text: str, **options) -> Dict[str, Any]:
        """Print a text payload (ZPL, plain text, ...)."""
        body = {'data': text, **options}
        return self._request('POST', f'/api/printers/{quote(printer)}/print', body)

    def print_file(self, printer: str, file_path: str, **options) -> Dict[str, Any]:
        """Print a local file by uploading its contents."""
        with open(file_path, 'rb') as f:
            return self.print_data(printer, f.read(), **options)
