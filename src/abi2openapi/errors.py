class Abi2OpenApiError(Exception):
    """
    Base class for all abi2openapi errors.
    """

    pass


class ParseError(Abi2OpenApiError):
    """
    Raised when an ABI document cannot be normalized, either because it is
    neither an array nor an object with an ``abi`` array, or because an item
    has a shape the normalizer cannot read. The underlying exception, if
    any, is chained as ``__cause__``.
    """

    pass


class AssemblyError(Abi2OpenApiError):
    """
    Raised when an OpenAPI document cannot be built from a normalized ABI,
    including name collisions detected in strict mode.
    """

    pass
