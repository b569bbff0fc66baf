"""Tests for printer record extraction."""

from cups_print_service.parser import extract_printers

from conftest import LPSTAT_OUTPUT


def snapshot_from(outputs):
    return {
        'printers': outputs['lpstat -p'],
        'accepting': outputs['lpstat -a'],
        'addresses': outputs['lpstat -s'],
        'default': outputs['lpstat -d'],
        'details': outputs['lpstat -l -p'],
    }


def test_extracts_all_printers_in_order():
    printers = extract_printers(snapshot_from(LPSTAT_OUTPUT))

    assert [p.name for p in printers] == ['HP_LaserJet', 'ZPL-PRINTER']


def test_default_flag():
    hp, zpl = extract_printers(snapshot_from(LPSTAT_OUTPUT))

    assert hp.is_default is True
    assert zpl.is_default is False


def test_default_flag_from_crafted_default_text():
    snapshot = {
        'printers': "printer A1 is idle.\nprinter B2 is idle.\nprinter C3 is idle.\n",
        'default': "system default destination: B2",
    }
    printers = extract_printers(snapshot)

    assert [p.name for p in printers if p.is_default] == ['B2']


def test_device_uri_and_accepting():
    hp, zpl = extract_printers(snapshot_from(LPSTAT_OUTPUT))

    assert hp.options['device-uri'] == 'ipp://192.168.1.20/ipp/print'
    assert hp.options['printer-is-accepting-jobs'] == 'true'
    assert hp.is_accepting_jobs
    assert zpl.device_uri == 'usb://Zebra/ZD421?serial=D2J1234'
    assert zpl.options['printer-is-accepting-jobs'] == 'false'


def test_descriptive_info():
    hp, zpl = extract_printers(snapshot_from(LPSTAT_OUTPUT))

    assert hp.options['printer-info'] == 'HP LaserJet 4000'
    assert hp.options['printer-location'] == 'Office 2'
    assert zpl.options['printer-info'] == 'Zebra ZD421'
    assert 'printer-location' not in zpl.options


def test_option_key_order():
    hp, _ = extract_printers(snapshot_from(LPSTAT_OUTPUT))

    assert list(hp.options) == [
        'printer-is-accepting-jobs', 'device-uri', 'printer-info', 'printer-location',
    ]


def test_printer_missing_from_other_queries():
    snapshot = snapshot_from(LPSTAT_OUTPUT)
    snapshot['printers'] += "printer Ghost is idle.  enabled since Mon Dec 18 10:00:00 2023\n"

    ghost = extract_printers(snapshot)[-1]

    assert ghost.name == 'Ghost'
    assert ghost.is_default is False
    assert ghost.options == {
        'printer-is-accepting-jobs': 'false',
        'device-uri': '',
    }


def test_empty_printers_text():
    assert extract_printers(snapshot_from({**LPSTAT_OUTPUT, 'lpstat -p': ''})) == []
    assert extract_printers({}) == []


def test_duplicate_header_lines_emit_one_record():
    snapshot = {
        'printers': (
            "printer Office is idle.\n"
            "printer Lab is idle.\n"
            "printer Office is idle.\n"
        ),
    }

    assert [p.name for p in extract_printers(snapshot)] == ['Office', 'Lab']


def test_status_lines_are_ignored():
    snapshot = {
        'printers': (
            "printer Office disabled since Tue Jan  2 09:00:00 2024 -\n"
            "\tPaused\n"
            "\tprinter is out of paper\n"
        ),
    }

    assert [p.name for p in extract_printers(snapshot)] == ['Office']
