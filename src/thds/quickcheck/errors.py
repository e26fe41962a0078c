import typing as ty


class QuickcheckError(Exception):
    """Base class for everything raised while configuring or resolving generators."""


class ConfigurationError(QuickcheckError, ValueError):
    """Raised when a range cannot be applied to a generator: an endpoint doesn't parse, the endpoints
    are out of order, or the generator doesn't accept range configuration at all.
    The raw endpoints are kept exactly as they were supplied."""

    def __init__(self, reason: str, min: ty.Any = None, max: ty.Any = None):
        super().__init__(reason, min, max)
        self.reason = reason
        self.min = min
        self.max = max

    def __str__(self):
        return f"{self.reason} (min={self.min!r}, max={self.max!r})"


class IncompatibleGeneratorError(QuickcheckError, TypeError):
    """Raised when an explicitly bound generator produces a type that can't stand in for the
    parameter's declared type."""

    def __init__(
        self, generator: ty.Any, mechanism: str, parameter_type: ty.Any, generated_type: ty.Any
    ):
        super().__init__(generator, mechanism, parameter_type, generated_type)
        self.generator = generator
        self.mechanism = mechanism
        self.parameter_type = parameter_type
        self.generated_type = generated_type

    def __str__(self):
        return (
            f"The generator {self.generator} named in @{self.mechanism} on parameter of type "
            f"{self.parameter_type} does not produce a type-compatible object "
            f"(it produces {self.generated_type})"
        )


class NoGeneratorFoundError(QuickcheckError, LookupError):
    def __init__(self, requested_type: ty.Any):
        super().__init__(requested_type)
        self.requested_type = requested_type

    def __str__(self):
        return f"Cannot find generator for {self.requested_type}"


class UnknownGeneratorError(QuickcheckError, LookupError):
    """Raised when a generator is bound by a name that nothing was registered under."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"No generator is registered under the name {self.name!r}"


class PhaseOrderError(QuickcheckError, RuntimeError):
    def __init__(self, attempted: str, current: str):
        super().__init__(attempted, current)
        self.attempted = attempted
        self.current = current

    def __str__(self):
        return f"Cannot apply the {self.attempted} phase after the {self.current} phase"
