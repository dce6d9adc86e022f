"""Build profile auto-increments build numbers.

Anything but the boolean true fails, including the "version"/"buildNumber"
strings: duplicate build numbers are rejected at upload.
"""

from preflight_checker.core.types import Rule, RuleContext, failed, passed

rule = Rule(name='auto-increment', help='autoIncrement is true in the build profile.', requires_profile=True)


@rule.check
def check(ctx: RuleContext):
    subject = f'build.{ctx.profile_name}.autoIncrement'
    value = ctx.profile.auto_increment
    if value is not True:
        return [failed(subject, f'autoIncrement is not true (got {value!r}).')]
    return [passed(subject, f'autoIncrement is active in {ctx.profile_name}.')]
