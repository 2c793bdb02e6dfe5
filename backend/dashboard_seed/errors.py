class SeedError(Exception):
    """Base class for failures reported on the seed status page."""


class ConfigurationMissing(SeedError):
    def __init__(self, variable: str = "POSTGRES_URL") -> None:
        self.variable = variable
        super().__init__(f"{variable} environment variable is not set")


class ConnectionFailure(SeedError):
    """The connectivity probe did not succeed within the allowed attempts."""

    def __init__(self, message: str, attempts: int = 0) -> None:
        self.attempts = attempts
        super().__init__(message)


class InvalidSampleData(SeedError):
    """The bundled sample records are inconsistent with each other."""
