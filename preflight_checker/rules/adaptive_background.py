"""Android adaptive icon has a background colour or a background image.

Without either the launcher renders the transparent layer as black. With both,
the colour wins and the image is ignored, so exactly one is expected. A
background image must exist and be 1024x1024. Skipped silently when no
adaptiveIcon is declared (adaptive-foreground already warns about that).
"""

from preflight_checker.core.assets import ICON_SIZE
from preflight_checker.core.types import Rule, RuleContext, failed, passed, warned

rule = Rule(name='adaptive-background', help='Adaptive icon has exactly one of backgroundColor/backgroundImage.')

SUBJECT = 'Android Adaptive Icon background'


@rule.check
def check(ctx: RuleContext):
    config = ctx.config
    if not config.adaptive_icon:
        return []
    colour = config.adaptive_background_color
    image = config.adaptive_background_image
    if colour and image:
        return [
            warned(SUBJECT, f'Both backgroundColor ({colour}) and backgroundImage are set; backgroundColor is used.')
        ]
    if colour:
        return [passed(SUBJECT, f'Android Adaptive Icon background color is set: {colour}')]
    if image:
        return ctx.inspector.check_asset(image, 'Android Background Image', ICON_SIZE)
    return [
        failed(
            SUBJECT,
            'Android Adaptive Icon requires either a backgroundColor or a backgroundImage '
            'to prevent transparency issues (black backgrounds).',
        )
    ]
