"""The gating build profile (default "production") exists.

FAIL when absent, and every profile-dependent rule after it is skipped for
the run. The CLI turns this case into a fatal precondition before the
catalog starts; library callers of evaluate() get the gated behaviour.
"""

from preflight_checker.core.types import Rule, RuleContext, failed, passed

rule = Rule(name='build-profile', help='The selected build profile exists.', gates_profile=True)


@rule.check
def check(ctx: RuleContext):
    subject = f'build.{ctx.profile_name}'
    if ctx.profile is None:
        return [failed(subject, f'"{subject}" profile not found.')]
    return [passed(subject, f'Build profile "{ctx.profile_name}" found.')]
