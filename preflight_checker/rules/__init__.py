"""Rule modules, one per catalog entry.

Each module defines a `rule` object and registers its check with
`@rule.check`. The module docstring is the rule's documentation
(`preflight-tool --list-rules`). Evaluation order is fixed by
preflight_checker.registry.CATALOG, not by file names; a new module is
inert until it is listed there.
"""
