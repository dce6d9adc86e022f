"""Rule catalog loading and evaluation.

CATALOG lists the rule modules under preflight_checker/rules/ in evaluation
order. The order is part of the output contract: the same inputs always give
the same findings in the same sequence, so it is spelled out here rather than
discovered from the file system.

evaluate() runs every rule in order and concatenates their findings. The only
short-circuit is the build-profile gate: when a gates_profile rule emits a
FAIL, every later requires_profile rule is skipped. Everything else runs
unconditionally so one bad field never hides unrelated problems.
"""

import importlib

from preflight_checker.core.types import Finding, Report, Rule, RuleContext, Severity

CATALOG = [
    'android_identity',
    'ios_identity',
    'linking_scheme',
    'runtime_version',
    'target_sdk',
    'new_architecture',
    'build_profile',
    'auto_increment',
    'env_vars',
    'project_link',
    'lockfile',
    'vcs_clean',
    'dimension_probe',
    'primary_icon',
    'splash_image',
    'adaptive_foreground',
    'adaptive_background',
    'ios_icon',
]

_catalog: list[Rule] = []


def load_module(modname: str) -> object:
    return importlib.import_module(f'preflight_checker.rules.{modname}')


def discover() -> list[Rule]:
    """Import all rule modules and return the rules in catalog order."""
    if _catalog:
        return _catalog

    for modname in CATALOG:
        rule = getattr(load_module(modname), 'rule', None)
        if not isinstance(rule, Rule):
            raise RuntimeError(f'preflight_checker.rules.{modname} does not define a Rule')
        _catalog.append(rule)

    return _catalog


def get(name: str) -> Rule:
    """Get a rule by name."""
    for rule in discover():
        if rule.name == name:
            return rule
    raise KeyError(f'Unknown rule: {name}. Available: {", ".join(r.name for r in discover())}')


def run(ctx: RuleContext, report: Report, rules: list[Rule] | None = None) -> Report:
    """Evaluate rules against ctx, appending findings and skips to report."""
    profile_gate_failed = False
    for rule in rules if rules is not None else discover():
        if rule.requires_profile and (profile_gate_failed or ctx.profile is None):
            report.skipped.append(rule.name)
            continue
        findings = rule.execute(ctx)
        if rule.gates_profile and any(f.severity is Severity.FAIL for f in findings):
            profile_gate_failed = True
        report.add(findings)
    return report


def evaluate(ctx: RuleContext) -> list[Finding]:
    """Ordered findings for ctx."""
    return run(ctx, Report(profile_name=ctx.profile_name)).findings
