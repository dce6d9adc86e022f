"""Report rendering — text and JSON output for preflight-tool results."""

import json
from typing import Any

from preflight_checker.core.types import Report, Severity

_COLOURS = {
    Severity.PASS: '\x1b[32m',
    Severity.WARN: '\x1b[33m',
    Severity.FAIL: '\x1b[31m',
}
_RESET = '\x1b[0m'


def _tag(severity: Severity, colour: bool) -> str:
    if colour:
        return f'{_COLOURS[severity]}{severity.tag}{_RESET}'
    return severity.tag


def summary_line(report: Report) -> str:
    counts = (
        f'{report.count(Severity.PASS)} pass, {report.count(Severity.WARN)} warn, {report.count(Severity.FAIL)} fail'
    )
    if report.skipped:
        counts += f'; {len(report.skipped)} rule(s) skipped: {", ".join(report.skipped)}'
    return f'verdict: {report.verdict.value} ({counts})'


def format_text(report: Report, colour: bool = False) -> str:
    """One line per finding in emission order, then the verdict line."""
    lines = [f'{_tag(f.severity, colour)} {f.subject}: {f.message}' for f in report.findings]
    summary = summary_line(report)
    if colour:
        summary = f'{_COLOURS[report.verdict]}{summary}{_RESET}'
    lines.append(summary)
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'config': report.config_path,
        'profiles': report.profile_path,
        'profile': report.profile_name,
        'findings': [f.as_dict() for f in report.findings],
        'skipped': list(report.skipped),
        'summary': {
            'pass': report.count(Severity.PASS),
            'warn': report.count(Severity.WARN),
            'fail': report.count(Severity.FAIL),
            'verdict': report.verdict.value,
        },
    }
    return json.dumps(obj, indent=2)
