"""preflight_checker.core — Foundation layer.

Contains the types, error taxonomy, config resolver, probes, asset inspector,
.env settings and report renderer.
This module has NO dependencies on preflight_checker.rules or preflight_checker.registry.
Only stdlib and PIL are allowed here.
"""
