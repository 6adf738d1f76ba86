class GasCapError(Exception): ...


class RestrictionError(GasCapError): ...


class ConfigError(GasCapError): ...


def require(condition: bool, message: str, exc: type[GasCapError] = GasCapError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
