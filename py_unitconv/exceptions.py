"""py_unitconv exception types.

Exception Hierarchy
-------------------

Exception (built-in Python)
├── ConversionError
│   ├── UndefinedOriginError
│   └── UndefinedConversionError
└── ValueError
    └── ConfigurationError

Exception Types
---------------

Conversion errors:

- ConversionError: Base class of the two user visible errors. The converter returns
  instances of these classes as values instead of raising them, so a failed conversion
  can be rendered with `as_string` like any successful one.

- UndefinedOriginError: The source value is absent, or its string could not be parsed
  into a registered unit.

- UndefinedConversionError: Source and target units are not connected by any resolvable
  path of conversion rules. Converting between units of different kinds always fails
  with this error.

Configuration errors:

- ConfigurationError: Raised while building the unit registry or conversion table from
  malformed configuration (bad edge keys, unknown special procedures, duplicate
  canonical units, unsupported rule values).
"""

__all__ = (
    'ConversionError',
    'UndefinedOriginError',
    'UndefinedConversionError',
    'ConfigurationError',
)


class ConversionError(Exception):
    """Conversion error.

    Attributes:
        message: Short human-readable error text.
    """

    message: str = "conversion error"

    def __init__(self, message: str = ''):
        if message:
            self.message = message
        super().__init__(self.message)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.message == other.message  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class UndefinedOriginError(ConversionError):
    """Source value is absent or can't be parsed into a registered unit."""

    message = "undefined origin"


class UndefinedConversionError(ConversionError):
    """No conversion path between source and target units."""

    message = "undefined conversion"


class ConfigurationError(ValueError):
    """Malformed unit or conversion configuration."""
