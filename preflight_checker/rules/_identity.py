"""Shared policy for the Android and iOS identity rules."""

import re

from preflight_checker.core.types import Finding, failed, passed

# Placeholder domains from templates and tutorials; stores reject or collide on them
RESERVED_PREFIX = re.compile(r'^(com|br)\.(example|test|demo)\.', re.IGNORECASE)


def check_identifier(value: object, field: str) -> list[Finding]:
    if value is None or value == '':
        return [failed(field, f'Missing {field}.')]
    if not isinstance(value, str):
        return [failed(field, f'{field} must be a string, got {value!r}.')]
    if RESERVED_PREFIX.match(value):
        return [
            failed(
                field,
                f'Invalid {field}: {value} (placeholder domain matching {RESERVED_PREFIX.pattern}; '
                'use a reverse-DNS id you own).',
            )
        ]
    return [passed(field, f'Valid {field}: {value}')]
