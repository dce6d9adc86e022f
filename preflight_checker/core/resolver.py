"""Config resolver: app config and build profiles to canonical snapshots.

Two strategies produce the same ResolvedConfig:

  DirectParse      read app.json (or any JSON file) from disk.
  CompiledResolve  run the compute-configuration command (default
                   `npx expo config --json`) in the project root and parse
                   its stdout. Used for app.config.js / app.config.ts.

Producers have wrapped the payload differently over time. normalize() tries
the known envelope shapes in a fixed order and nothing downstream ever sees
which one matched:

  1. {"exp": {...}}   legacy compute output
  2. {"expo": {...}}  static app.json
  3. {...}            current compute output, unwrapped

Nothing here is retried. Every failure is a FatalPrecondition.
"""

import json
import subprocess
from pathlib import Path
from typing import Any

from preflight_checker.core.errors import (
    ConfigMalformed,
    ConfigMissing,
    ExternalResolveFailure,
    ProfileMalformed,
    ProfileMissing,
)
from preflight_checker.core.types import BuildProfile, ProfileRecord, ResolvedConfig

DEFAULT_CONFIG_COMMAND = ['npx', 'expo', 'config', '--json']
DEFAULT_TIMEOUT = 120.0

_ENVELOPE_KEYS = ('exp', 'expo')
# An unwrapped payload must carry at least one of these to count as an app config
_PAYLOAD_MARKERS = ('name', 'slug', 'android', 'ios')


def _get(mapping: Any, *keys: str) -> Any:
    """Nested lookup that treats any non-mapping along the way as absent."""
    current = mapping
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def unwrap(document: Any) -> dict[str, Any] | None:
    """Return the app-config payload from any known envelope, or None."""
    if not isinstance(document, dict):
        return None
    for key in _ENVELOPE_KEYS:
        inner = document.get(key)
        if isinstance(inner, dict):
            return inner
    if any(marker in document for marker in _PAYLOAD_MARKERS):
        return document
    return None


def _plugin_target_sdk(payload: dict[str, Any]) -> Any:
    """android.targetSdkVersion from the expo-build-properties plugin options, if declared."""
    plugins = payload.get('plugins')
    if not isinstance(plugins, list):
        return None
    for entry in plugins:
        if isinstance(entry, list) and len(entry) >= 2 and entry[0] == 'expo-build-properties':
            return _get(entry[1], 'android', 'targetSdkVersion')
    return None


def to_resolved(payload: dict[str, Any]) -> ResolvedConfig:
    """Map an unwrapped app-config payload onto ResolvedConfig."""
    target_sdk = _get(payload, 'android', 'targetSdkVersion')
    if target_sdk is None:
        target_sdk = _plugin_target_sdk(payload)
    adaptive = _get(payload, 'android', 'adaptiveIcon')
    return ResolvedConfig(
        name=payload.get('name'),
        slug=payload.get('slug'),
        android_package=_get(payload, 'android', 'package'),
        ios_bundle_identifier=_get(payload, 'ios', 'bundleIdentifier'),
        scheme=payload.get('scheme'),
        runtime_version=payload.get('runtimeVersion'),
        target_sdk_version=target_sdk,
        new_arch_enabled=payload.get('newArchEnabled'),
        project_id=_get(payload, 'extra', 'eas', 'projectId'),
        icon=payload.get('icon'),
        splash_image=_get(payload, 'splash', 'image'),
        adaptive_icon=isinstance(adaptive, dict),
        adaptive_foreground=_get(adaptive, 'foregroundImage'),
        adaptive_background_color=_get(adaptive, 'backgroundColor'),
        adaptive_background_image=_get(adaptive, 'backgroundImage'),
        ios_icon=_get(payload, 'ios', 'icon'),
    )


def normalize(document: Any, source: str = '<config>') -> ResolvedConfig:
    """Normalize a parsed config document of any known envelope shape."""
    payload = unwrap(document)
    if payload is None:
        raise ConfigMalformed(f'{source}: no app config found (expected an "expo" object).')
    return to_resolved(payload)


def resolve_config_string(text: str, source: str = '<config>') -> ResolvedConfig:
    """DirectParse from a string."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigMalformed(f'{source}: invalid JSON ({exc.msg} at line {exc.lineno}).') from exc
    return normalize(document, source)


def resolve_config_file(path: str | Path) -> ResolvedConfig:
    """DirectParse from disk."""
    path = Path(path)
    if not path.is_file():
        raise ConfigMissing(f'{path} not found.')
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigMalformed(f'{path}: could not be read ({exc}).') from exc
    return resolve_config_string(text, str(path))


def check_project_environment(project_root: Path) -> None:
    """The compute command only works inside an installed Expo project."""
    package_json = project_root / 'package.json'
    if not package_json.is_file():
        raise ConfigMissing(f'package.json not found in {project_root}. Are you in the right directory?')
    try:
        pkg = json.loads(package_json.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigMalformed(f'{package_json}: could not be parsed ({exc}).') from exc
    if not _get(pkg, 'dependencies', 'expo'):
        raise ConfigMalformed('This does not appear to be an Expo project. Missing "expo" in dependencies.')
    if not (project_root / 'node_modules').is_dir():
        raise ExternalResolveFailure('node_modules not found. Run npm/yarn/bun install.')


def resolve_compiled(
    project_root: Path,
    command: list[str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    check_environment: bool = True,
) -> ResolvedConfig:
    """CompiledResolve: run the compute-configuration command once and normalize its stdout."""
    command = list(command or DEFAULT_CONFIG_COMMAND)
    if check_environment:
        check_project_environment(project_root)
    shown = ' '.join(command)
    try:
        result = subprocess.run(
            command,
            cwd=project_root,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise ExternalResolveFailure(f'`{shown}` could not be started: {exc}') from exc
    except subprocess.TimeoutExpired as exc:
        raise ExternalResolveFailure(f'`{shown}` timed out after {timeout:g}s.') from exc

    if result.returncode != 0:
        raise ExternalResolveFailure(
            f'`{shown}` exited with status {result.returncode}. '
            'Ensure your app.config.js has no syntax errors.'
        )
    try:
        document = json.loads(result.stdout)
    except json.JSONDecodeError as exc:
        raise ExternalResolveFailure(f'`{shown}` did not print valid JSON ({exc.msg}).') from exc

    payload = unwrap(document)
    if payload is None or not payload.get('slug'):
        raise ExternalResolveFailure(f'`{shown}` output is not a recognizable app config (no slug).')
    return to_resolved(payload)


def resolve(
    config_path: str | Path,
    compiled: bool = False,
    project_root: Path | None = None,
    command: list[str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> ResolvedConfig:
    """Resolve the app config with the requested strategy."""
    if compiled:
        root = project_root if project_root is not None else Path(config_path).parent
        return resolve_compiled(root, command=command, timeout=timeout)
    return resolve_config_file(config_path)


def _profile_record(name: str, raw: Any, source: str) -> ProfileRecord:
    if not isinstance(raw, dict):
        raise ProfileMalformed(f'{source}: build.{name} must be an object.')
    env = raw.get('env', {})
    if env is None:
        env = {}
    if not isinstance(env, dict):
        raise ProfileMalformed(f'{source}: build.{name}.env must be an object.')
    return ProfileRecord(
        auto_increment=raw.get('autoIncrement'),
        env={str(k): '' if v is None else str(v) for k, v in env.items()},
    )


def load_profiles_string(text: str, source: str = '<profiles>') -> BuildProfile:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProfileMalformed(f'{source}: invalid JSON ({exc.msg} at line {exc.lineno}).') from exc
    build = _get(document, 'build')
    if not isinstance(build, dict):
        raise ProfileMalformed(f'{source}: missing "build" object.')
    return BuildProfile({name: _profile_record(name, raw, source) for name, raw in build.items()})


def load_profiles_file(path: str | Path) -> BuildProfile:
    """Parse eas.json-style build profiles from disk."""
    path = Path(path)
    if not path.is_file():
        raise ProfileMissing(f'{path} not found!')
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        raise ProfileMalformed(f'{path}: could not be read ({exc}).') from exc
    return load_profiles_string(text, str(path))


def require_profile(profiles: BuildProfile, name: str, source: str = '<profiles>') -> None:
    """Fatal when the gating profile is absent."""
    if name not in profiles:
        available = ', '.join(sorted(profiles.profiles)) or 'none'
        raise ProfileMissing(f'"build.{name}" profile not found in {source} (available: {available}).')
