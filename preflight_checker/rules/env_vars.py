"""Build profile declares environment variables.

WARN when none are declared; PASS lists the keys (never the values).
"""

from preflight_checker.core.types import Rule, RuleContext, passed, warned

rule = Rule(name='env-vars', help='The build profile declares env variables.', requires_profile=True)


@rule.check
def check(ctx: RuleContext):
    subject = f'build.{ctx.profile_name}.env'
    keys = sorted(ctx.profile.env)
    if not keys:
        return [warned(subject, f'No env variables detected in {ctx.profile_name} profile.')]
    return [passed(subject, f'Environment variables detected: {", ".join(keys)}')]
