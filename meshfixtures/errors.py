"""Error types raised by the fixture engine.

Every error derives from ``FixtureError`` and from the builtin it
specializes, so callers may catch either. None of these are retried:
they signal a caller precondition or an invariant bug upstream.
"""


class FixtureError(Exception):
    """Base class for all fixture engine errors."""


class EmptyInputError(FixtureError, ValueError):
    """A random pick was requested from an empty sequence."""


class DefinitionNotFoundError(FixtureError, LookupError):
    """A forced model has no match in the device catalog."""

    def __init__(self, model: str):
        super().__init__(f"No definition found for model '{model}'")
        self.model = model


class InvalidRelationshipError(FixtureError, ValueError):
    """Two device types that can never be adjacent reached the relationship table."""

    def __init__(self, a: str, b: str):
        super().__init__(f"Cannot have a relationship {a}<>{b}")
        self.a = a
        self.b = b


class CatalogError(FixtureError, ValueError):
    """A catalog record failed validation while preparing the catalog."""


class InvalidDeviceTypeError(FixtureError, ValueError):
    """A forced device type is not one a generated device may have."""

    def __init__(self, device_type: str):
        super().__init__(f"Invalid device type '{device_type}', expected one of Router, EndDevice, Unknown, GreenPower")
        self.device_type = device_type
