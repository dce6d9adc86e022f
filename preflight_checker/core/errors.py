"""Error taxonomy for preflight-tool.

Two families:

  FatalPrecondition: the artefacts needed to run the catalog are missing or
  unreadable. Raised by the resolver, caught once by the CLI, which prints a
  single message and exits 1 before any rule runs.

  RuleViolation, ProbeUnavailable: raised inside rule checks and probes and
  recovered by the rule machinery. They become Findings and never escape
  the evaluator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from preflight_checker.core.types import Finding


class PreflightError(Exception):
    """Base class for every error preflight-tool raises on purpose."""


class FatalPrecondition(PreflightError):
    """A structural failure that aborts the run before the rule catalog executes."""


class ConfigMissing(FatalPrecondition):
    pass


class ConfigMalformed(FatalPrecondition):
    pass


class ProfileMissing(FatalPrecondition):
    pass


class ProfileMalformed(FatalPrecondition):
    pass


class ExternalResolveFailure(FatalPrecondition):
    """The compute-configuration subprocess failed, timed out or printed garbage."""


class RuleViolation(PreflightError):
    """Ends a rule check early with the finding it carries."""

    def __init__(self, finding: Finding):
        super().__init__(finding.message)
        self.finding = finding


class ProbeUnavailable(PreflightError):
    """An optional probe could not answer. Always degrades to WARN."""
