"""Tests for CLI commands."""

import json
from argparse import Namespace
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from lproj_sync.__version__ import __author__, __version__
from lproj_sync.cli import (
    cmd_init,
    cmd_resolve,
    cmd_apply,
    load_and_validate_config,
    main,
)
from lproj_sync.utils.config import ConfigValidationError
from lproj_sync.xcode.project import get_pbxproj


def write_app_json(directory, locales, name='MyApp'):
    path = directory / 'app.json'
    path.write_text(json.dumps({'expo': {'name': name, 'locales': locales}}), encoding='utf-8')
    return path


def resolve_args(**overrides):
    args = dict(config=None, project_root=None, json=None, verbose=False)
    args.update(overrides)
    return Namespace(**args)


def apply_args(**overrides):
    args = dict(config=None, project_root=None, verbose=False)
    args.update(overrides)
    return Namespace(**args)


class TestCmdInit:
    """Test cases for cmd_init command."""

    def test_init_creates_config_file(self, tmp_path):
        """init should write a sample .lproj-sync.yml."""
        with patch('lproj_sync.cli.Path.cwd', return_value=tmp_path):
            result = cmd_init(Namespace(force=False))

        assert result == 0
        config_data = yaml.safe_load((tmp_path / '.lproj-sync.yml').read_text(encoding='utf-8'))
        assert config_data == {'name': 'MyApp', 'locales': {'en': {'CFBundleDisplayName': 'MyApp'}}}

    def test_init_fails_without_force_if_exists(self, tmp_path):
        config_path = tmp_path / '.lproj-sync.yml'
        config_path.write_text('existing: config')

        with patch('lproj_sync.cli.Path.cwd', return_value=tmp_path):
            result = cmd_init(Namespace(force=False))

        assert result == 1
        assert config_path.read_text() == 'existing: config'

    def test_init_overwrites_with_force(self, tmp_path):
        config_path = tmp_path / '.lproj-sync.yml'
        config_path.write_text('old: config')

        with patch('lproj_sync.cli.Path.cwd', return_value=tmp_path):
            result = cmd_init(Namespace(force=True))

        assert result == 0
        assert 'old' not in yaml.safe_load(config_path.read_text())


class TestLoadAndValidateConfig:
    """Test cases for load_and_validate_config()."""

    def test_valid(self, tmp_path):
        path = write_app_json(tmp_path, {'en': {'K': 'V'}})

        config = load_and_validate_config(str(path))

        assert config.locales == {'en': {'K': 'V'}}

    def test_invalid_locales(self, tmp_path, capsys):
        path = write_app_json(tmp_path, {'en': 42})

        with pytest.raises(ConfigValidationError):
            load_and_validate_config(str(path))

        assert "Configuration errors" in capsys.readouterr().out

    def test_unreadable(self, tmp_path, capsys):
        path = tmp_path / 'app.json'
        path.write_text('{')

        with pytest.raises(ConfigValidationError):
            load_and_validate_config(str(path))

        assert "Cannot load config" in capsys.readouterr().out

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigValidationError):
            load_and_validate_config(str(tmp_path / 'missing.json'))

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / '.lproj-sync.yml'
        path.write_text('locales: [unclosed\n')

        with pytest.raises(ConfigValidationError):
            load_and_validate_config(str(path))

    def test_verbose_prints_warnings(self, tmp_path, capsys):
        path = write_app_json(tmp_path, {'de': 'de.json'})

        load_and_validate_config(str(path), verbose=True)

        assert "does not exist" in capsys.readouterr().out


class TestCmdResolve:
    """Test cases for cmd_resolve command."""

    def test_resolve_lists_locales(self, tmp_path, capsys):
        (tmp_path / 'fr.json').write_text(json.dumps({'K': 'V', 'L': 'W'}))
        path = write_app_json(tmp_path, {'en': {'K': 'V'}, 'fr': 'fr.json'})

        result = cmd_resolve(resolve_args(config=str(path)))

        out = capsys.readouterr().out
        assert result == 0
        assert "en" in out
        assert "2 keys" in out
        assert "fr.json" in out

    def test_resolve_json_export(self, tmp_path):
        path = write_app_json(tmp_path, {'tr': {'CFBundleDisplayName': 'Uygulamam'}})
        output = tmp_path / 'resolved.json'

        result = cmd_resolve(resolve_args(config=str(path), json=str(output)))

        assert result == 0
        assert json.loads(output.read_text(encoding='utf-8')) == {'tr': {'CFBundleDisplayName': 'Uygulamam'}}

    def test_resolve_reports_failed_locale(self, tmp_path, capsys):
        path = write_app_json(tmp_path, {'de': 'de.json'})

        result = cmd_resolve(resolve_args(config=str(path)))

        out = capsys.readouterr().out
        assert result == 0
        assert "No locale resolved" in out
        assert "Failed to parse JSON of locale file for language: de" in out

    def test_resolve_without_locales(self, tmp_path, capsys):
        path = tmp_path / 'app.json'
        path.write_text(json.dumps({'expo': {'name': 'MyApp'}}))

        result = cmd_resolve(resolve_args(config=str(path)))

        assert result == 0
        assert "No locales configured" in capsys.readouterr().out

    def test_resolve_with_project_root(self, tmp_path, capsys):
        """Locale paths resolve against --project-root when given."""
        app_root = tmp_path / 'app'
        (app_root / 'languages').mkdir(parents=True)
        (app_root / 'languages' / 'es.json').write_text(json.dumps({'K': 'V'}))
        config_path = tmp_path / '.lproj-sync.yml'
        config_path.write_text('locales:\n  es: languages/es.json\n')

        result = cmd_resolve(resolve_args(config=str(config_path), project_root=str(app_root)))

        assert result == 0
        assert "Failed to parse" not in capsys.readouterr().out

    def test_resolve_invalid_config(self, tmp_path):
        path = write_app_json(tmp_path, ['en'])

        assert cmd_resolve(resolve_args(config=str(path))) == 1


class TestCmdApply:
    """Test cases for cmd_apply command."""

    def test_apply(self, app_dir, capsys):
        path = write_app_json(app_dir, {'en': {'Key': 'Value'}})

        result = cmd_apply(apply_args(config=str(path)))

        assert result == 0
        strings = app_dir / 'ios' / 'MyApp' / 'Supporting' / 'en.lproj' / 'InfoPlist.strings'
        assert strings.read_text(encoding='utf-8') == 'Key = "Value";'
        assert get_pbxproj(app_dir).group_by_path('MyApp/Supporting/en.lproj').has_child('InfoPlist.strings')
        assert "Locales applied" in capsys.readouterr().out

    def test_apply_prints_warnings(self, app_dir, capsys):
        path = write_app_json(app_dir, {'en': {'Key': 'Value'}, 'de': 'de.json'})

        result = cmd_apply(apply_args(config=str(path)))

        out = capsys.readouterr().out
        assert result == 0
        assert "1 warning(s)" in out
        assert "locales-de" in out

    def test_apply_without_locales(self, tmp_path, capsys):
        path = write_app_json(tmp_path, {})

        result = cmd_apply(apply_args(config=str(path)))

        assert result == 0
        assert "nothing to do" in capsys.readouterr().out

    def test_apply_without_ios_project(self, tmp_path, capsys):
        path = write_app_json(tmp_path, {'en': {'K': 'V'}})

        result = cmd_apply(apply_args(config=str(path)))

        assert result == 1
        assert "Xcode project error" in capsys.readouterr().out

    def test_apply_malformed_project(self, app_dir, capsys):
        (app_dir / 'ios' / 'MyApp.xcodeproj' / 'project.pbxproj').write_text('{ objects = ')
        path = write_app_json(app_dir, {'en': {'K': 'V'}})

        result = cmd_apply(apply_args(config=str(path)))

        assert result == 1
        assert "Xcode project error" in capsys.readouterr().out

    def test_apply_file_system_error(self, app_dir, capsys):
        (app_dir / 'ios' / 'MyApp').mkdir()
        (app_dir / 'ios' / 'MyApp' / 'Supporting').write_text('')
        path = write_app_json(app_dir, {'en': {'K': 'V'}})

        result = cmd_apply(apply_args(config=str(path)))

        assert result == 1
        assert "File system error" in capsys.readouterr().out


class TestMain:
    """Test cases for main() argument handling."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: lproj-sync" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_apply_dispatch(self, app_dir):
        path = write_app_json(app_dir, {'en': {'K': 'V'}})

        assert main(['--no-color', 'apply', '--config', str(path)]) == 0
        assert (app_dir / 'ios' / 'MyApp' / 'Supporting' / 'en.lproj' / 'InfoPlist.strings').exists()

    def test_resolve_dispatch_with_log_file(self, tmp_path):
        path = write_app_json(tmp_path, {'de': 'de.json'})
        log_file = tmp_path / 'logs' / 'run.log'

        assert main(['--log-file', str(log_file), 'resolve', '-c', str(path)]) == 0
        assert "locales-de" in log_file.read_text(encoding='utf-8')

    def test_init_dispatch(self, tmp_path):
        with patch('lproj_sync.cli.Path.cwd', return_value=tmp_path):
            assert main(['init']) == 0

        assert (tmp_path / '.lproj-sync.yml').exists()

    def test_no_color_disables_codes(self, tmp_path, capsys):
        path = write_app_json(tmp_path, {'en': {'K': 'V'}})

        main(['--no-color', 'resolve', '--config', str(path)])

        assert '\033[' not in capsys.readouterr().out

    @pytest.mark.parametrize('command', ['apply', 'resolve'])
    def test_warning_printed_once(self, app_dir, capsys, command):
        """A failed locale appears once, in the summary after the run."""
        path = write_app_json(app_dir, {'en': {'K': 'V'}, 'de': 'missing.json'})

        assert main([command, '--config', str(path)]) == 0

        out = capsys.readouterr().out
        assert out.count('Failed to parse JSON of locale file for language: de') == 1
        assert '1 warning(s)' in out


class TestPackageMetadata:
    def test_author_is_project_maintainers(self):
        assert __author__ == 'lproj-sync contributors'

    def test_setup_declares_no_author_email(self):
        setup_py = Path(__file__).resolve().parent.parent / 'setup.py'
        text = setup_py.read_text(encoding='utf-8')
        assert 'author=version_info["__author__"]' in text
        assert 'author_email' not in text
