"""
Tests for the edgegrid-sign command-line interface
"""

import re
from unittest.mock import patch

import pytest

from edgegrid_sdk.cli import main, parse_header_arguments


EDGERC = (
    "[default]\n"
    "host = h.example.com\n"
    "client_token = CT\n"
    "client_secret = SEC\n"
    "access_token = AT\n"
    "\n"
    "[broken]\n"
    "client_token = CT\n"
)


@pytest.fixture
def edgerc_path(tmp_path):
    """Temporary .edgerc file."""
    path = tmp_path / '.edgerc'
    path.write_text(EDGERC, encoding='utf-8')
    return str(path)


class TestHeaderCommand:
    """Test the header subcommand"""

    def test_prints_authorization_header(self, edgerc_path, capsys):
        exit_code = main(['--edgerc', edgerc_path, 'header', '--path', '/papi/v1/groups'])

        assert exit_code == 0
        output = capsys.readouterr().out.strip()
        assert re.match(
            r'^Authorization: EG1-HMAC-SHA256 client_token=CT;access_token=AT;'
            r'timestamp=\d{8}T\d{2}:\d{2}:\d{2}\+0000;nonce=[0-9a-f-]{36};signature=\S+$',
            output
        )

    def test_show_canonical(self, edgerc_path, capsys):
        with patch('edgegrid_sdk.signing.eg1_signer.generate_nonce', return_value='n-1'):
            exit_code = main([
                '--edgerc', edgerc_path, 'header',
                '--method', 'post',
                '--path', '/x?y=1',
                '--header', 'X-Custom:  a   b',
                '--sign-header', 'x-custom',
                '--body', 'payload',
                '--show-canonical',
            ])

        assert exit_code == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("'POST\\thttps\\th.example.com\\t/x?y=1\\tx-custom:a b\\t")
        assert 'nonce=n-1;' in lines[0]
        assert lines[1].startswith('Authorization: EG1-HMAC-SHA256 ')

    def test_missing_section(self, edgerc_path, capsys):
        exit_code = main(['--edgerc', edgerc_path, 'header', '--section', 'nope', '--path', '/'])

        assert exit_code == 1
        assert "Section 'nope' not found" in capsys.readouterr().err

    def test_missing_host(self, edgerc_path, capsys):
        exit_code = main(['--edgerc', edgerc_path, 'header', '--section', 'broken', '--path', '/'])

        assert exit_code == 1
        assert 'Missing host' in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        exit_code = main(['--edgerc', str(tmp_path / 'absent'), 'header', '--path', '/'])

        assert exit_code == 1
        assert 'Failed to read credentials file' in capsys.readouterr().err

    def test_invalid_path(self, edgerc_path, capsys):
        exit_code = main(['--edgerc', edgerc_path, 'header', '--path', 'no-slash'])

        assert exit_code == 1
        assert "must start with '/'" in capsys.readouterr().err

    def test_invalid_header_argument(self, edgerc_path, capsys):
        exit_code = main(['--edgerc', edgerc_path, 'header', '--path', '/', '--header', 'no-colon'])

        assert exit_code == 2
        assert 'expected NAME:VALUE' in capsys.readouterr().err


class TestSectionsCommand:
    """Test the sections subcommand"""

    def test_lists_sections(self, edgerc_path, capsys):
        assert main(['--edgerc', edgerc_path, 'sections']) == 0
        assert capsys.readouterr().out.splitlines() == ['default', 'broken']

    def test_uses_environment_path(self, edgerc_path, monkeypatch, capsys):
        monkeypatch.setenv('EDGERC', edgerc_path)
        assert main(['sections']) == 0
        assert 'default' in capsys.readouterr().out


class TestCliParsing:
    """Test argument parsing helpers"""

    def test_no_command_shows_help(self, capsys):
        assert main([]) == 1
        assert 'edgegrid-sign' in capsys.readouterr().out

    def test_parse_header_arguments(self):
        assert parse_header_arguments(['Content-Type: application/json', 'X-A:b:c']) == {
            'Content-Type': 'application/json',
            'X-A': 'b:c',
        }

    def test_parse_header_arguments_rejects_missing_colon(self):
        with pytest.raises(ValueError):
            parse_header_arguments(['bad'])
