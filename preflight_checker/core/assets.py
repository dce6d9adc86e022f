"""Asset inspector: existence and pixel dimensions of referenced images.

Paths are resolved against the project root, the same way the build
pipeline resolves them from app.json.

Existence is always checked. Dimensions are only checked when a
DimensionProbe was injected; without one, the dimension-probe rule emits the
single WARN disclosing that no dimension validation ran, and check_asset
stays silent about dimensions.
"""

from pathlib import Path

from preflight_checker.core.probes import DimensionProbe
from preflight_checker.core.types import Finding, failed, passed, warned

# Store-ready icons are square 1024px masters
ICON_SIZE = (1024, 1024)


class AssetInspector:
    def __init__(self, project_root: Path, probe: DimensionProbe | None = None):
        self.project_root = project_root
        self.probe = probe

    @property
    def dimensions_enabled(self) -> bool:
        return self.probe is not None

    def resolve(self, ref: str) -> Path:
        return self.project_root / ref

    def disclosure(self) -> Finding:
        """The once-per-run statement of whether dimension checks will execute."""
        if self.probe is None:
            return warned(
                'Image dimensions',
                'No image dimension probe available (install Pillow). '
                'Dimension validation did not run; only file existence is checked.',
            )
        return passed('Image dimensions', f'Dimension probe available ({self.probe.name}).')

    def check_asset(self, ref: object, name: str, expected: tuple[int, int] | None = None) -> list[Finding]:
        """Existence, then (probe permitting) dimensions of one referenced asset."""
        if not isinstance(ref, str) or not ref.strip():
            return [failed(name, f'Asset reference must be a non-empty path string, got {ref!r}.')]

        path = self.resolve(ref)
        if not path.is_file():
            return [failed(name, f'File not found at path: {ref}')]
        findings = [passed(name, f'File exists: {ref}')]

        if expected is None or self.probe is None:
            return findings

        want_w, want_h = expected
        try:
            width, height = self.probe.size(path)
        except (OSError, ValueError, SyntaxError) as exc:
            findings.append(
                failed(name, f'Could not parse image dimensions. Ensure it is a valid image file. Error: {exc}')
            )
            return findings

        if (width, height) != (want_w, want_h):
            findings.append(
                failed(name, f'Invalid dimensions. Expected {want_w}x{want_h}, got {width}x{height}.')
            )
        else:
            findings.append(passed(name, f'Dimensions are correct ({want_w}x{want_h}).'))
        return findings
