"""Deep-link scheme is declared.

WARN when absent: OAuth redirects and universal links have nothing to land on.
"""

from preflight_checker.core.types import Rule, RuleContext, passed, warned

rule = Rule(name='linking-scheme', help='A deep-link "scheme" is declared.')


@rule.check
def check(ctx: RuleContext):
    scheme = ctx.config.scheme
    if isinstance(scheme, list):
        scheme = ', '.join(str(s) for s in scheme if s)
    if not scheme:
        return [warned('scheme', 'Missing "scheme" property.')]
    return [passed('scheme', f'Scheme configured: {scheme}')]
