"""Shared fixtures."""

import shutil
from pathlib import Path

import pytest

from lproj_sync.utils.colors import Colors
from lproj_sync.utils.logging import reset_logger

FIXTURES_DIR = Path(__file__).parent / 'fixtures'
FIXTURE_PBXPROJ = FIXTURES_DIR / 'project.pbxproj'
SPM_PBXPROJ = FIXTURES_DIR / 'spm.pbxproj'


def _make_ios_project(project_root: Path, name: str = 'MyApp', fixture: Path = FIXTURE_PBXPROJ) -> Path:
    """Lay out ios/<name>.xcodeproj/project.pbxproj under project_root."""
    xcodeproj = project_root / 'ios' / f'{name}.xcodeproj'
    xcodeproj.mkdir(parents=True)
    pbxproj = xcodeproj / 'project.pbxproj'
    shutil.copy(fixture, pbxproj)
    return pbxproj


@pytest.fixture
def make_ios_project():
    """Factory placing a copy of the fixture project under a directory."""
    return _make_ios_project


@pytest.fixture
def fixture_pbxproj_text():
    return FIXTURE_PBXPROJ.read_text(encoding='utf-8')


@pytest.fixture
def spm_pbxproj():
    """Project using remote and local Swift packages."""
    return SPM_PBXPROJ


@pytest.fixture
def app_dir(tmp_path):
    """An app directory with an Expo-style iOS project named MyApp."""
    _make_ios_project(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_globals():
    yield
    reset_logger()
    Colors.enable()
