"""iOS-specific icon, only when declared, exists and is 1024x1024.

Undeclared is fine: iOS falls back to the global icon.
"""

from preflight_checker.core.assets import ICON_SIZE
from preflight_checker.core.types import Rule, RuleContext

rule = Rule(name='ios-icon', help='iOS-specific icon exists and is 1024x1024 (only if declared).')


@rule.check
def check(ctx: RuleContext):
    if not ctx.config.ios_icon:
        return []
    return ctx.inspector.check_asset(ctx.config.ios_icon, 'iOS Specific Icon', ICON_SIZE)
