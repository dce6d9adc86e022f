"""Global app icon is declared, exists and is 1024x1024."""

from preflight_checker.core.assets import ICON_SIZE
from preflight_checker.core.types import Rule, RuleContext, failed

rule = Rule(name='primary-icon', help='Global icon exists and is 1024x1024.')


@rule.check
def check(ctx: RuleContext):
    if not ctx.config.icon:
        return [failed('Global Icon', 'Missing global "icon" in app config.')]
    return ctx.inspector.check_asset(ctx.config.icon, 'Global Icon', ICON_SIZE)
