"""Android adaptive icon foreground, if configured, exists and is 1024x1024.

No adaptiveIcon at all warns that the launcher will crop the global icon.
"""

from preflight_checker.core.assets import ICON_SIZE
from preflight_checker.core.types import Rule, RuleContext, warned

rule = Rule(name='adaptive-foreground', help='Adaptive icon foreground exists and is 1024x1024 (optional).')

NAME = 'Android Foreground Image'


@rule.check
def check(ctx: RuleContext):
    if not ctx.config.adaptive_icon:
        return [
            warned('Android Adaptive Icon', 'No Android adaptiveIcon configured. The app will use the default crop.')
        ]
    if not ctx.config.adaptive_foreground:
        return [warned(NAME, 'Missing foregroundImage for Android adaptive icon.')]
    return ctx.inspector.check_asset(ctx.config.adaptive_foreground, NAME, ICON_SIZE)
