"""Project is linked to the build service (extra.eas.projectId)."""

from preflight_checker.core.types import Rule, RuleContext, failed, passed

rule = Rule(name='project-link', help='extra.eas.projectId is set.')


@rule.check
def check(ctx: RuleContext):
    project_id = ctx.config.project_id
    if not project_id:
        return [failed('extra.eas.projectId', 'Missing expo.extra.eas.projectId. Run `eas init` to link the project.')]
    return [passed('extra.eas.projectId', f'Project linked to EAS (ID: {project_id}).')]
