"""FreeFlow Exception Hierarchy.

All custom exceptions inherit from FreeFlowError.

Runtime counters (depth, budget) never raise: out-of-range values are
clamped. Exceptions are reserved for bad configuration and for lifecycle
misuse by the caller.

Exception Hierarchy:
    FreeFlowError (base)
    ├── ConfigurationError
    ├── ValidationError
    └── SessionError
"""


class FreeFlowError(Exception):
    """Base exception for all FreeFlow errors.

    All custom exceptions in FreeFlow inherit from this class,
    allowing for broad exception handling when needed.
    """

    pass


class ConfigurationError(FreeFlowError):
    """Configuration is invalid or missing.

    Raised when:
        - Unknown variant name requested
        - Environment value cannot be parsed
    """

    pass


class ValidationError(FreeFlowError):
    """Variant constants failed validation.

    Raised when:
        - Session duration is not positive
        - Spawn intervals are negative or zero
        - Decay constant is negative
        - Depth or budget limits are out of range
    """

    pass


class SessionError(FreeFlowError):
    """Dive session lifecycle misuse.

    Raised when:
        - A finished session is started again
    """

    pass
