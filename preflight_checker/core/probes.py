"""Optional capabilities injected into the rule context.

DimensionProbe returns (width, height) for an image path. The default
implementation reads the image header with Pillow. When no probe is injected
the asset rules still check existence and skip dimensions.

VcsProbe lists uncommitted changes in the working tree. The default
implementation shells out to `git status --porcelain`. Any failure raises
ProbeUnavailable, which the vcs-clean rule reports as WARN.
"""

import subprocess
from pathlib import Path
from typing import Protocol

from preflight_checker.core.errors import ProbeUnavailable


class DimensionProbe(Protocol):
    name: str

    def size(self, path: Path) -> tuple[int, int]: ...


class VcsProbe(Protocol):
    name: str

    def changes(self) -> list[str]: ...


class PillowDimensionProbe:
    """Decode only the image header; Image.open is lazy about pixel data."""

    name = 'Pillow'

    def size(self, path: Path) -> tuple[int, int]:
        from PIL import Image

        try:
            with Image.open(path) as img:
                return img.width, img.height
        except Image.DecompressionBombError as exc:
            raise ValueError(str(exc)) from exc


def default_dimension_probe() -> DimensionProbe | None:
    """Pillow probe, or None if Pillow cannot be imported."""
    try:
        import PIL.Image  # noqa: F401
    except ImportError:
        return None
    return PillowDimensionProbe()


class GitStatusProbe:
    name = 'git'

    def __init__(self, root: Path, timeout: float = 10.0):
        self.root = root
        self.timeout = timeout

    def changes(self) -> list[str]:
        """Porcelain status lines; empty when the tree is clean."""
        try:
            result = subprocess.run(
                ['git', 'status', '--porcelain'],
                cwd=self.root,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        # OSError covers a missing git binary and an unusable root alike
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise ProbeUnavailable(f'git status could not run: {exc}') from exc
        if result.returncode != 0:
            detail = result.stderr.strip().splitlines()[0] if result.stderr.strip() else f'exit {result.returncode}'
            raise ProbeUnavailable(f'git status failed: {detail}')
        return [line for line in result.stdout.splitlines() if line.strip()]
