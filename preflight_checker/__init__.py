"""preflight-tool — pre-flight validation of Expo build configuration.

Usage:
    preflight-tool [app.json] [eas.json] [--profile NAME] [--compile] [--json]
"""

__version__ = '0.1.0'
