"""Shared fixtures: a fully valid Expo project on disk and helpers to bend it."""

import copy
import json
from pathlib import Path

import pytest
from PIL import Image

from preflight_checker.core.assets import AssetInspector
from preflight_checker.core.resolver import load_profiles_string, normalize
from preflight_checker.core.types import RuleContext

VALID_APP = {
    'expo': {
        'name': 'Acme',
        'slug': 'acme',
        'scheme': 'myapp',
        'runtimeVersion': {'policy': 'fingerprint'},
        'icon': './assets/icon.png',
        'android': {
            'package': 'com.acme.app',
            'targetSdkVersion': 35,
            'adaptiveIcon': {
                'foregroundImage': './assets/adaptive-icon.png',
                'backgroundColor': '#ffffff',
            },
        },
        'ios': {'bundleIdentifier': 'com.acme.app'},
        'extra': {'eas': {'projectId': 'b7f1c2d4-0000-4000-8000-000000000001'}},
    }
}

VALID_EAS = {
    'build': {
        'development': {'developmentClient': True},
        'production': {'autoIncrement': True, 'env': {'API_URL': 'https://x'}},
    }
}


def write_png(path: Path, size: tuple[int, int] = (1024, 1024)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new('RGB', size, (255, 255, 255)).save(path)
    return path


class FakeProbe:
    """Dimension probe returning canned sizes, or raising for unknown files."""

    name = 'fake'

    def __init__(self, size: tuple[int, int] = (1024, 1024), error: Exception | None = None):
        self._size = size
        self._error = error
        self.calls: list[Path] = []

    def size(self, path: Path) -> tuple[int, int]:
        self.calls.append(path)
        if self._error is not None:
            raise self._error
        return self._size


class FakeVcs:
    name = 'fake-vcs'

    def __init__(self, changes: list[str] | None = None, error: Exception | None = None):
        self._changes = changes or []
        self._error = error

    def changes(self) -> list[str]:
        if self._error is not None:
            raise self._error
        return list(self._changes)


@pytest.fixture
def app_doc() -> dict:
    return copy.deepcopy(VALID_APP)


@pytest.fixture
def eas_doc() -> dict:
    return copy.deepcopy(VALID_EAS)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project root where every rule passes (bar the advisory/optional warnings)."""
    (tmp_path / 'app.json').write_text(json.dumps(VALID_APP), encoding='utf-8')
    (tmp_path / 'eas.json').write_text(json.dumps(VALID_EAS), encoding='utf-8')
    (tmp_path / 'package-lock.json').write_text('{}', encoding='utf-8')
    write_png(tmp_path / 'assets' / 'icon.png')
    write_png(tmp_path / 'assets' / 'adaptive-icon.png')
    return tmp_path


def make_context(
    root: Path,
    app: dict,
    eas: dict,
    probe=None,
    vcs=None,
    profile_name: str = 'production',
) -> RuleContext:
    return RuleContext(
        config=normalize(app),
        profiles=load_profiles_string(json.dumps(eas)),
        project_root=root,
        inspector=AssetInspector(root, probe),
        profile_name=profile_name,
        vcs_probe=vcs,
    )
