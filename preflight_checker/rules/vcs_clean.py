"""Working tree has no uncommitted changes.

Advisory only: uploads come from the working tree, so a dirty tree means the
build may not match any commit. Dirty, probe missing, or probe error are all
WARN; the rule is capped at WARN and can never fail the run.
"""

from preflight_checker.core.errors import ProbeUnavailable
from preflight_checker.core.types import Rule, RuleContext, passed, warned

rule = Rule(name='vcs-clean', help='Working tree is clean (advisory).', advisory=True)

SUBJECT = 'vcs'


@rule.check
def check(ctx: RuleContext):
    if ctx.vcs_probe is None:
        return [warned(SUBJECT, 'No VCS probe available. Working tree cleanliness was not checked.')]
    try:
        changes = ctx.vcs_probe.changes()
    except ProbeUnavailable as exc:
        return [warned(SUBJECT, f'Could not check working tree: {exc}')]
    if changes:
        return [warned(SUBJECT, f'{len(changes)} uncommitted change(s) in the working tree.')]
    return [passed(SUBJECT, 'Working tree is clean.')]
