"""Shared types for preflight-tool: Severity, Finding, ResolvedConfig, BuildProfile, Rule, RuleContext, Report."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from preflight_checker.core.errors import RuleViolation

if TYPE_CHECKING:
    from preflight_checker.core.assets import AssetInspector
    from preflight_checker.core.probes import VcsProbe


class Severity(str, Enum):
    PASS = 'PASS'
    WARN = 'WARN'
    FAIL = 'FAIL'

    @property
    def tag(self) -> str:
        return f'[{self.value}]'


# Only used to compute the aggregate verdict, never to sort findings
_VERDICT_RANK = {Severity.PASS: 0, Severity.WARN: 1, Severity.FAIL: 2}


def worst(severities: Iterable[Severity]) -> Severity:
    """Highest severity in the iterable (PASS when empty)."""
    result = Severity.PASS
    for sev in severities:
        if _VERDICT_RANK[sev] > _VERDICT_RANK[result]:
            result = sev
    return result


@dataclass(frozen=True)
class Finding:
    """One outcome of one rule check."""

    severity: Severity
    subject: str  # e.g. 'android.package', 'Global Icon'
    message: str

    def as_dict(self) -> dict[str, str]:
        return {'severity': self.severity.value, 'subject': self.subject, 'message': self.message}


def passed(subject: str, message: str) -> Finding:
    return Finding(Severity.PASS, subject, message)


def warned(subject: str, message: str) -> Finding:
    return Finding(Severity.WARN, subject, message)


def failed(subject: str, message: str) -> Finding:
    return Finding(Severity.FAIL, subject, message)


@dataclass(frozen=True)
class ResolvedConfig:
    """Canonical app configuration, identical in shape whatever envelope it came from.

    Values are kept as found in the document (no coercion) so rules can tell
    "absent" from "present but wrong type".
    """

    name: str | None = None
    slug: str | None = None
    android_package: Any = None
    ios_bundle_identifier: Any = None
    scheme: Any = None
    runtime_version: Any = None  # '1.0.0' or {'policy': 'fingerprint'}
    target_sdk_version: Any = None
    new_arch_enabled: Any = None
    project_id: Any = None
    icon: Any = None
    splash_image: Any = None
    adaptive_icon: bool = False  # android.adaptiveIcon declared at all
    adaptive_foreground: Any = None
    adaptive_background_color: Any = None
    adaptive_background_image: Any = None
    ios_icon: Any = None


@dataclass(frozen=True)
class ProfileRecord:
    """One build profile: only the fields the catalog inspects."""

    auto_increment: Any = None  # raw value; only boolean True passes
    env: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BuildProfile:
    """Build profiles keyed by name (e.g. 'production')."""

    profiles: dict[str, ProfileRecord] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.profiles

    def get(self, name: str) -> ProfileRecord | None:
        return self.profiles.get(name)


@dataclass
class RuleContext:
    """Everything a rule may read. Built once per run, read-only afterwards."""

    config: ResolvedConfig
    profiles: BuildProfile
    project_root: Path
    inspector: AssetInspector
    profile_name: str = 'production'
    vcs_probe: VcsProbe | None = None

    @property
    def profile(self) -> ProfileRecord | None:
        return self.profiles.get(self.profile_name)


CheckFn = Callable[[RuleContext], Iterable[Finding]]


class Rule:
    """A self-registering catalog rule.

    Usage in a rule module:

        rule = Rule(name='linking-scheme', help='Deep-link scheme is declared')

        @rule.check
        def check(ctx):
            ...
            return [passed(...)]

    requires_profile: skipped when the build-profile gate failed.
    gates_profile: a FAIL from this rule skips every requires_profile rule.
    advisory: findings are capped at WARN, so the rule can never block.
    """

    def __init__(
        self,
        name: str,
        help: str = '',
        requires_profile: bool = False,
        gates_profile: bool = False,
        advisory: bool = False,
    ):
        self.name = name
        self.help = help
        self.requires_profile = requires_profile
        self.gates_profile = gates_profile
        self.advisory = advisory
        self._check_fn: CheckFn | None = None

    def check(self, fn: CheckFn) -> CheckFn:
        """Decorator to register the check function."""
        self._check_fn = fn
        return fn

    def execute(self, ctx: RuleContext) -> list[Finding]:
        """Run the check and return its findings in emission order."""
        if self._check_fn is None:
            raise RuntimeError(f'Rule {self.name} has no check function')
        try:
            findings = list(self._check_fn(ctx))
        except RuleViolation as violation:
            findings = [violation.finding]
        if self.advisory:
            findings = [
                Finding(Severity.WARN, f.subject, f.message) if f.severity is Severity.FAIL else f for f in findings
            ]
        return findings

    def __repr__(self) -> str:
        return f'Rule({self.name!r})'


@dataclass
class Report:
    """Accumulates findings in emission order and computes the verdict."""

    config_path: str = ''
    profile_path: str = ''
    profile_name: str = 'production'
    findings: list[Finding] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)  # rule names skipped by the profile gate

    def add(self, findings: Iterable[Finding]) -> None:
        self.findings.extend(findings)

    def count(self, severity: Severity) -> int:
        return sum(1 for f in self.findings if f.severity is severity)

    @property
    def verdict(self) -> Severity:
        """FAIL iff any finding failed. WARN never blocks."""
        return Severity.FAIL if worst(f.severity for f in self.findings) is Severity.FAIL else Severity.PASS

    @property
    def exit_status(self) -> int:
        return 1 if self.verdict is Severity.FAIL else 0
