"""iOS bundle identifier (ios.bundleIdentifier) is set and not a placeholder.

Same policy as android-identity.
"""

from preflight_checker.core.types import Rule, RuleContext
from preflight_checker.rules._identity import check_identifier

rule = Rule(name='ios-identity', help='ios.bundleIdentifier is set and not a placeholder domain.')


@rule.check
def check(ctx: RuleContext):
    return check_identifier(ctx.config.ios_bundle_identifier, 'ios.bundleIdentifier')
