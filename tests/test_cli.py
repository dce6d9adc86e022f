"""End-to-end tests for the preflight-tool command line."""

import json
import shlex
import sys
from pathlib import Path

import pytest
from conftest import VALID_APP, write_png
from preflight_checker.__main__ import run

_VARS = ('PREFLIGHT_PROFILE', 'PREFLIGHT_CONFIG_COMMAND', 'PREFLIGHT_COMPILE_TIMEOUT', 'PREFLIGHT_NO_DIMENSIONS')


@pytest.fixture
def in_project(project: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for var in _VARS:
        monkeypatch.setenv(var, '')
        monkeypatch.delenv(var)
    # Stops the .env walk at the project
    (project / '.git').mkdir()
    monkeypatch.chdir(project)
    return project


def _edit_json(path: Path, edit) -> None:
    doc = json.loads(path.read_text())
    edit(doc)
    path.write_text(json.dumps(doc))


def _make_expo_project(root: Path) -> None:
    (root / 'package.json').write_text(json.dumps({'dependencies': {'expo': '~54.0.0'}}))
    (root / 'node_modules').mkdir()
    (root / 'compute.py').write_text(
        'import json, sys\n'
        f'payload = {VALID_APP["expo"]!r}\n'
        'sys.stdout.write(json.dumps(payload))\n'
    )


class TestPassAndFail:
    def test_valid_project_exits_zero(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run([]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == '[PASS] android.package: Valid android.package: com.acme.app'
        assert out[-1].startswith('verdict: PASS')
        assert all(line.startswith(('[PASS]', '[WARN]')) for line in out[:-1])

    def test_auto_increment_false_exits_one(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        _edit_json(in_project / 'eas.json', lambda d: d['build']['production'].update(autoIncrement=False))
        assert run([]) == 1
        out = capsys.readouterr().out
        assert '[FAIL] build.production.autoIncrement: autoIncrement is not true' in out
        assert out.splitlines()[-1].startswith('verdict: FAIL')

    def test_all_rules_reported_despite_failures(
        self, in_project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _edit_json(in_project / 'app.json', lambda d: d['expo']['android'].update(package='com.example.app'))
        (in_project / 'package-lock.json').unlink()
        assert run([]) == 1
        out = capsys.readouterr().out
        assert '[FAIL] android.package: Invalid android.package: com.example.app' in out
        assert '[FAIL] lockfile:' in out
        assert '[PASS] Global Icon: File exists: ./assets/icon.png' in out

    def test_warn_only_exits_zero(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        _edit_json(in_project / 'app.json', lambda d: d['expo'].update(runtimeVersion='1.0.0', newArchEnabled=False))
        assert run([]) == 0
        out = capsys.readouterr().out
        assert '[WARN] runtimeVersion:' in out
        assert '[WARN] newArchEnabled:' in out

    def test_wrong_icon_size(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_png(in_project / 'assets' / 'icon.png', (512, 512))
        assert run([]) == 1
        assert 'Expected 1024x1024, got 512x512' in capsys.readouterr().out


class TestFatalPreconditions:
    def test_missing_profile_aborts_before_rules(
        self, in_project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _edit_json(in_project / 'eas.json', lambda d: d['build'].pop('production'))
        assert run([]) == 1
        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'fatal' in captured.err
        assert 'build.production' in captured.err

    def test_missing_config(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (in_project / 'app.json').unlink()
        assert run([]) == 1
        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'app.json not found' in captured.err

    def test_malformed_config(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (in_project / 'app.json').write_text('{nope')
        assert run([]) == 1
        assert 'invalid JSON' in capsys.readouterr().err

    def test_missing_profile_document(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (in_project / 'eas.json').unlink()
        assert run([]) == 1
        assert 'eas.json not found' in capsys.readouterr().err

    def test_malformed_profile_document(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (in_project / 'eas.json').write_text(json.dumps({'build': []}))
        assert run([]) == 1
        assert 'fatal' in capsys.readouterr().err

    def test_bad_timeout_setting(
        self, in_project: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv('PREFLIGHT_COMPILE_TIMEOUT', 'forever')
        assert run([]) == 1
        assert 'PREFLIGHT_COMPILE_TIMEOUT' in capsys.readouterr().err

    @pytest.mark.parametrize('value', ['-5', '0'])
    def test_non_positive_timeout_flag(
        self, in_project: Path, capsys: pytest.CaptureFixture[str], value: str
    ) -> None:
        assert run(['--timeout', value]) == 1
        captured = capsys.readouterr()
        assert captured.out == ''
        assert '--timeout must be a positive number' in captured.err


class TestOptions:
    def test_positional_paths(
        self, project: Path, tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        elsewhere = tmp_path_factory.mktemp('elsewhere')
        (elsewhere / '.git').mkdir()
        monkeypatch.chdir(elsewhere)
        assert run([str(project / 'app.json'), str(project / 'eas.json')]) == 0

    def test_project_root_supplies_default_documents(
        self, project: Path, tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        elsewhere = tmp_path_factory.mktemp('elsewhere')
        (elsewhere / '.git').mkdir()
        monkeypatch.chdir(elsewhere)
        assert run(['--project-root', str(project)]) == 0

    def test_profile_flag(
self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(['--profile', 'development']) == 1
        out = capsys.readouterr().out
        assert '[FAIL] build.development.autoIncrement' in out
        assert '[WARN] build.development.env' in out

    def test_profile_from_env_file(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (in_project / '.env').write_text('PREFLIGHT_PROFILE=development\n')
        assert run([]) == 1
        captured = capsys.readouterr()
        assert 'loaded' in captured.err
        assert 'build.development.autoIncrement' in captured.out

    def test_json_output(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(['--json']) == 0
        parsed = json.loads(capsys.readouterr().out)
        assert parsed['summary']['verdict'] == 'PASS'
        assert parsed['findings'][0]['subject'] == 'android.package'

    def test_no_dimensions(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_png(in_project / 'assets' / 'icon.png', (512, 512))
        assert run(['--no-dimensions']) == 0
        out = capsys.readouterr().out
        assert out.count('[WARN] Image dimensions:') == 1
        assert '512x512' not in out

    def test_color(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        run(['--color'])
        assert '\x1b[32m[PASS]' in capsys.readouterr().out

    def test_list_rules(self, in_project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(['--list-rules']) == 0
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split()[0] == 'android-identity'
        assert lines[-1].split()[0] == 'ios-icon'
        assert '[gate]' in out


class TestCompiledResolve:
    def test_compile_flag(
        self, in_project: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _make_expo_project(in_project)
        (in_project / 'app.json').unlink()
        monkeypatch.setenv('PREFLIGHT_CONFIG_COMMAND', shlex.join([sys.executable, 'compute.py']))
        assert run(['--compile']) == 0
        captured = capsys.readouterr()
        assert 'resolving config via' in captured.err
        assert 'verdict: PASS' in captured.out

    def test_dynamic_config_selects_compile(
        self, in_project: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _make_expo_project(in_project)
        (in_project / 'app.json').unlink()
        (in_project / 'app.config.js').write_text('module.exports = {};\n')
        monkeypatch.setenv('PREFLIGHT_CONFIG_COMMAND', shlex.join([sys.executable, 'compute.py']))
        assert run([]) == 0
        assert 'resolving config via' in capsys.readouterr().err

    def test_dynamic_config_found_in_project_root(
        self,
        in_project: Path,
        tmp_path_factory: pytest.TempPathFactory,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _make_expo_project(in_project)
        (in_project / 'app.json').unlink()
        (in_project / 'app.config.js').write_text('module.exports = {};\n')
        monkeypatch.setenv('PREFLIGHT_CONFIG_COMMAND', shlex.join([sys.executable, 'compute.py']))
        elsewhere = tmp_path_factory.mktemp('elsewhere')
        (elsewhere / '.git').mkdir()
        monkeypatch.chdir(elsewhere)
        assert run(['--project-root', str(in_project)]) == 0
        captured = capsys.readouterr()
        assert 'resolving config via' in captured.err
        assert 'verdict: PASS' in captured.out

    def test_compile_failure_is_fatal(

        self, in_project: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _make_expo_project(in_project)
        monkeypatch.setenv('PREFLIGHT_CONFIG_COMMAND', shlex.join([sys.executable, '-c', 'raise SystemExit(1)']))
        assert run(['--compile']) == 1
        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'exited with status 1' in captured.err

    def test_compile_timeout_flag(
        self, in_project: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _make_expo_project(in_project)
        monkeypatch.setenv(
            'PREFLIGHT_CONFIG_COMMAND', shlex.join([sys.executable, '-c', 'import time; time.sleep(5)'])
        )
        assert run(['--compile', '--timeout', '0.2']) == 1
        assert 'timed out' in capsys.readouterr().err
