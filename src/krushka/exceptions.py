"""Exception hierarchy for KRUSHKA."""


class KrushkaError(Exception):
    """Base class for all KRUSHKA errors."""


class ConfigurationError(KrushkaError):
    """Settings cannot drive a session (bad constants, missing levels)."""
