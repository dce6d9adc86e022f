"""runtimeVersion uses the fingerprint policy.

  absent                       WARN
  {"policy": "fingerprint"}    PASS
  anything else                WARN (a hand-maintained version string drifts
                               from the native layer and ships OTA updates to
                               incompatible binaries)
"""

from preflight_checker.core.types import Rule, RuleContext, passed, warned

rule = Rule(name='runtime-version', help='runtimeVersion is {"policy": "fingerprint"}.')


@rule.check
def check(ctx: RuleContext):
    value = ctx.config.runtime_version
    if value is None or value == '':
        return [warned('runtimeVersion', 'Missing "runtimeVersion".')]
    if isinstance(value, dict) and value.get('policy') == 'fingerprint':
        return [passed('runtimeVersion', 'runtimeVersion uses fingerprint policy.')]
    return [warned('runtimeVersion', f'runtimeVersion is {value!r}. Prefer {{"policy": "fingerprint"}}.')]
