"""A package-manager lockfile is committed in the project root.

Without one the remote build resolves dependencies afresh and may not
reproduce the local build.
"""

from preflight_checker.core.types import Rule, RuleContext, failed, passed

LOCKFILES = ('package-lock.json', 'yarn.lock', 'pnpm-lock.yaml', 'bun.lockb', 'bun.lock')

rule = Rule(name='lockfile', help='A recognized lockfile exists in the project root.')


@rule.check
def check(ctx: RuleContext):
    found = [name for name in LOCKFILES if (ctx.project_root / name).is_file()]
    if not found:
        return [failed('lockfile', f'No lockfile found (looked for {", ".join(LOCKFILES)}).')]
    return [passed('lockfile', f'Lockfile detected: {", ".join(found)}')]
