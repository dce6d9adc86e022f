"""Settings for preflight-tool, read from the environment and .env files.

Load order (first wins):
  1. Existing OS environment variables, which are never overwritten.
  2. The .env file given with --env-file.
  3. The nearest .env walking up from the working directory. The walk stops
     at the repository root (a .git dir or file) so a .env belonging to some
     other checkout is never picked up.

Recognized variables:
  PREFLIGHT_PROFILE          build profile to gate on (default: production)
  PREFLIGHT_CONFIG_COMMAND   compute-configuration command (default: npx expo config --json)
  PREFLIGHT_COMPILE_TIMEOUT  seconds before the compute command is abandoned (default: 120)
  PREFLIGHT_NO_DIMENSIONS    truthy to skip image dimension checks
"""

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path

from preflight_checker.core.errors import ConfigMalformed
from preflight_checker.core.resolver import DEFAULT_CONFIG_COMMAND, DEFAULT_TIMEOUT

_TRUTHY = {'1', 'true', 'yes', 'on'}


def _find_dotenv(start: Path) -> Path | None:
    """Nearest .env at or above start, without crossing a .git boundary."""
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / '.env'
        if candidate.is_file():
            return candidate
        if (directory / '.git').exists():
            return None
    return None


def _parse_dotenv(path: Path) -> dict[str, str]:
    """KEY=value lines; `export ` prefixes, quotes, blanks and # comments are tolerated."""
    result: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        if line.startswith('export '):
            line = line[len('export ') :]
        key, _, value = line.partition('=')
        key = key.strip()
        if key:
            result[key] = value.strip().strip('"').strip("'")
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env values into os.environ without overriding anything already set.

    Returns the file that was loaded, or None.
    """
    path = Path(env_file) if env_file else _find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return None
    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


@dataclass
class Settings:
    profile: str = 'production'
    config_command: list[str] = field(default_factory=lambda: list(DEFAULT_CONFIG_COMMAND))
    compile_timeout: float = DEFAULT_TIMEOUT
    dimensions: bool = True

    @classmethod
    def from_env(cls) -> 'Settings':
        settings = cls()
        profile = os.environ.get('PREFLIGHT_PROFILE', '').strip()
        if profile:
            settings.profile = profile
        command = os.environ.get('PREFLIGHT_CONFIG_COMMAND', '').strip()
        if command:
            settings.config_command = shlex.split(command)
        timeout = os.environ.get('PREFLIGHT_COMPILE_TIMEOUT', '').strip()
        if timeout:
            try:
                settings.compile_timeout = float(timeout)
            except ValueError as exc:
                raise ConfigMalformed(f'PREFLIGHT_COMPILE_TIMEOUT must be a number of seconds, got {timeout!r}.') from exc
            if not settings.compile_timeout > 0:
                raise ConfigMalformed(f'PREFLIGHT_COMPILE_TIMEOUT must be positive, got {timeout!r}.')
        if os.environ.get('PREFLIGHT_NO_DIMENSIONS', '').strip().lower() in _TRUTHY:
            settings.dimensions = False
        return settings
