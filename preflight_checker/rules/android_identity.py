"""Android application id (android.package) is set and not a placeholder.

FAIL when missing, or when it starts with a reserved placeholder domain
(com.example., br.example., com.test., com.demo., ... case-insensitive).
"""

from preflight_checker.core.types import Rule, RuleContext
from preflight_checker.rules._identity import check_identifier

rule = Rule(name='android-identity', help='android.package is set and not a placeholder domain.')


@rule.check
def check(ctx: RuleContext):
    return check_identifier(ctx.config.android_package, 'android.package')
