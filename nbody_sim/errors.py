"""Exception types raised by the simulator."""


class NBodyError(Exception):
    """Base class for simulator errors."""


class ConfigError(NBodyError, ValueError):
    """Invalid simulation configuration. Raised before any state is built."""


class IngestError(NBodyError, ValueError):
    """Initial conditions could not be read.

    Attributes:
        particle: Index of the particle being read (None if not applicable)
        field: Name of the field being read (None if not applicable)
    """

    def __init__(self, message: str, particle: int = None, field: str = None):
        super().__init__(message)
        self.particle = particle
        self.field = field
