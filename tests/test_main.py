"""Tests for contact_vcard.main -- the command-line workflow."""

import json

import pytest

from contact_vcard.main import main


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / 'contacts.json'
    path.write_text(json.dumps([
        {
            'name': ['Jane Doe'],
            'familyName': 'Doe',
            'givenName': 'Jane',
            'tel': [{'type': ['work'], 'value': '(650) 253-0000'}],
            'updated': '2024-01-02T03:04:05.000Z',
        },
        {'name': ['John Roe']},
    ]), encoding='utf-8')
    return path


def _run(tmp_path, *args):
    main(['--log-file', str(tmp_path / 'logs' / 'export.log'), *args])


def test_exports_and_validates(tmp_path, input_file):
    output = tmp_path / 'contacts.vcf'
    _run(tmp_path, '--input', str(input_file), '--output', str(output))

    content = output.read_bytes().decode('utf-8')
    assert content.count('BEGIN:VCARD\r\n') == 2
    assert 'TEL;TYPE=work:(650) 253-0000\r\n' in content
    assert 'REV:2024-01-02T03:04:05.000Z\r\n' in content
    assert (tmp_path / 'logs' / 'export.log').exists()


def test_fold_width_below_minimum_exits(tmp_path, input_file):
    with pytest.raises(SystemExit) as exc_info:
        _run(
            tmp_path,
            '--input', str(input_file),
            '--output', str(tmp_path / 'contacts.vcf'),
            '--fold-width', '10',
        )
    assert exc_info.value.code == 1
    assert not (tmp_path / 'contacts.vcf').exists()


def test_missing_input_exits(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        _run(
            tmp_path,
            '--input', str(tmp_path / 'missing.json'),
            '--output', str(tmp_path / 'contacts.vcf'),
        )
    assert exc_info.value.code == 1


def test_invalid_json_exits(tmp_path):
    broken = tmp_path / 'broken.json'
    broken.write_text('not json', encoding='utf-8')
    with pytest.raises(SystemExit) as exc_info:
        _run(tmp_path, '--input', str(broken), '--output', str(tmp_path / 'out.vcf'))
    assert exc_info.value.code == 1


def test_minimum_fold_width_accepted(tmp_path, input_file):
    output = tmp_path / 'narrow.vcf'
    _run(
        tmp_path,
        '--input', str(input_file),
        '--output', str(output),
        '--fold-width', '20',
    )
    for line in output.read_bytes().decode('utf-8').split('\r\n'):
        assert len(line) <= 20


def test_fold_width_one_below_minimum_exits(tmp_path, input_file):
    with pytest.raises(SystemExit) as exc_info:
        _run(
            tmp_path,
            '--input', str(input_file),
            '--output', str(tmp_path / 'contacts.vcf'),
            '--fold-width', '19',
        )
    assert exc_info.value.code == 1
