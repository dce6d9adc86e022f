"""Splash image, if configured, exists. Dimensions are not constrained."""

from preflight_checker.core.types import Rule, RuleContext, warned

rule = Rule(name='splash-image', help='Splash image exists (optional).')


@rule.check
def check(ctx: RuleContext):
    if not ctx.config.splash_image:
        return [warned('Splash Screen', 'No custom splash screen image configured.')]
    return ctx.inspector.check_asset(ctx.config.splash_image, 'Splash Screen')
