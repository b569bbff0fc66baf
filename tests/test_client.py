"""Tests for the HTTP client SDK."""

import base64
from unittest.mock import Mock, patch

import requests

from cups_print_service.client import PrintClient


def json_response(payload):
    response = Mock()
    response.json.return_value = payload
    return response


def test_list_printers():
    client = PrintClient('http://print-host:5100/')
    printers = [{'name': 'Office', 'is_default': True, 'options': {}}]

    with patch('requests.get', return_value=json_response({'success': True, 'printers': printers})) as mock_get:
        assert client.list_printers() == printers

    assert mock_get.call_args[0][0] == 'http://print-host:5100/api/printers'


def test_get_printer_quotes_name():
    client = PrintClient()

    with patch('requests.get', return_value=json_response({'success': False})) as mock_get:
        assert client.get_printer('Front Desk') is None

    assert mock_get.call_args[0][0] == 'http://localhost:5100/api/printers/Front%20Desk'


def test_print_data_sends_base64_and_bearer_token():
    client = PrintClient(api_key='secret')

    with patch('requests.post', return_value=json_response({'success': True, 'job_id': 'Office-3'})) as mock_post:
        result = client.print_data('Office', b'%PDF-1.7', type='PDF', copies=2)

    assert result['job_id'] == 'Office-3'
    kwargs = mock_post.call_args[1]
    assert kwargs['headers']['Authorization'] == 'Bearer secret'
    assert base64.b64decode(kwargs['json']['data_base64']) == b'%PDF-1.7'
    assert kwargs['json']['type'] == 'PDF'
    assert kwargs['json']['copies'] == 2


def test_print_text():
    client = PrintClient()

    with patch('requests.post', return_value=json_response({'success': True})) as mock_post:
        client.print_text('ZPL-PRINTER', '^XA^XZ', options={'media': '4x6'})

    assert mock_post.call_args[0][0] == 'http://localhost:5100/api/printers/ZPL-PRINTER/print'
    assert mock_post.call_args[1]['json'] == {'data': '^XA^XZ', 'options': {'media': '4x6'}}


def test_print_file(tmp_path):
    path = tmp_path / 'label.zpl'
    path.write_bytes(b'^XA^XZ')
    client = PrintClient()

    with patch('requests.post', return_value=json_response({'success': True})) as mock_post:
        client.print_file('ZPL-PRINTER', str(path))

    assert base64.b64decode(mock_post.call_args[1]['json']['data_base64']) == b'^XA^XZ'


def test_connection_error():
    client = PrintClient('http://nowhere:5100')

    with patch('requests.get', side_effect=requests.exceptions.ConnectionError()):
        assert client.health() == {'success': False, 'error': 'Cannot connect to http://nowhere:5100'}
        assert client.is_online() is False


def test_timeout():
    client = PrintClient()

    with patch('requests.get', side_effect=requests.exceptions.Timeout()):
        assert client.health()['error'] == 'Request timeout'


def test_is_online():
    client = PrintClient()

    with patch('requests.get', return_value=json_response({'status': 'online'})):
        assert client.is_online() is True
