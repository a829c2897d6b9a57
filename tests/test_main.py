"""Tests for the command-line entry point."""
import json

import pytest

from main import main


@pytest.fixture
def job_file(tmp_path, job_payload):
    path = tmp_path / 'job.json'
    path.write_text(json.dumps(job_payload))
    return path


class TestMain:
    """Tests for main()."""

    def test_writes_program_file(self, job_file, tmp_path, capsys):
        output = tmp_path / 'side.nc'

        assert main([str(job_file), '-o', str(output)]) == 0

        text = output.read_text()
        assert text.startswith('; Program for: Cabinet side\n')
        assert text.endswith('M30 ; End of program\n')
        assert str(output) in capsys.readouterr().out

    def test_print_program(self, job_file, capsys):
        assert main([str(job_file), '--print']) == 0
        out = capsys.readouterr().out
        assert out.startswith('; Program for: Cabinet side\n')

    def test_dialect_override(self, job_file, capsys):
        assert main([str(job_file), '--print', '--dialect', 'scm']) == 0
        out = capsys.readouterr().out
        assert out.startswith('(Program for: Cabinet side)\n')

    def test_warnings_to_stderr(self, tmp_path, job_payload, capsys):
        job_payload['operations'][0]['tool'] = 'drill_35mm'
        path = tmp_path / 'job.json'
        path.write_text(json.dumps(job_payload))

        assert main([str(path), '--print']) == 0
        err = capsys.readouterr().err
        assert 'WARNING: ERROR: tool "drill_35mm" not found for operation 1' in err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / 'absent.json')]) == 1
        assert 'Job file not found' in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / 'job.json'
        path.write_text('{not json')
        assert main([str(path)]) == 1
        assert 'not valid JSON' in capsys.readouterr().err
