"""New Architecture is not explicitly disabled.

Only an explicit newArchEnabled: false warns; absent means the SDK default.
"""

from preflight_checker.core.types import Rule, RuleContext, passed, warned

rule = Rule(name='new-architecture', help='newArchEnabled is not explicitly false.')


@rule.check
def check(ctx: RuleContext):
    if ctx.config.new_arch_enabled is False:
        return [warned('newArchEnabled', 'newArchEnabled is false. Fabric is recommended in SDK 55+.')]
    return [passed('newArchEnabled', 'New Architecture not disabled.')]
