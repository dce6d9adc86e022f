"""Disclose once whether image dimension checks will execute.

Runs immediately before the asset rules. Without a probe this is the single
WARN of the run about skipped dimension validation; the asset rules then
check existence only.
"""

from preflight_checker.core.types import Rule, RuleContext

rule = Rule(name='dimension-probe', help='Report whether image dimension checks can run.')


@rule.check
def check(ctx: RuleContext):
    return [ctx.inspector.disclosure()]
