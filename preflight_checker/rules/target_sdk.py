"""Android targetSdkVersion meets the store minimum (API 35).

Read from android.targetSdkVersion, else from the expo-build-properties
plugin. Missing, non-numeric or below 35 is FAIL.
"""

import math

from preflight_checker.core.errors import RuleViolation
from preflight_checker.core.types import Rule, RuleContext, failed, passed

MIN_TARGET_SDK = 35

rule = Rule(name='target-sdk', help=f'android.targetSdkVersion >= {MIN_TARGET_SDK}.')

SUBJECT = 'android.targetSdkVersion'


def _require_number(value: object) -> float:
    if value is None:
        raise RuleViolation(failed(SUBJECT, f'targetSdkVersion is missing. API {MIN_TARGET_SDK} is mandatory.'))
    # NaN and Infinity parse as floats but are never an API level
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise RuleViolation(
            failed(SUBJECT, f'targetSdkVersion must be a number, got {value!r}. API {MIN_TARGET_SDK} is mandatory.')
        )
    return value


@rule.check
def check(ctx: RuleContext):
    value = _require_number(ctx.config.target_sdk_version)
    if value < MIN_TARGET_SDK:
        return [failed(SUBJECT, f'targetSdkVersion is {value}. API {MIN_TARGET_SDK} is mandatory.')]
    return [passed(SUBJECT, f'Valid targetSdkVersion: {value}')]
