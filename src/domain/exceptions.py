"""
Domain error taxonomy.

InvalidArgument subclasses ValueError so callers that already guard use cases
with ``except ValueError`` keep working.
"""


class InvalidArgument(ValueError):
    """A caller supplied a missing or out-of-contract argument."""


class UpstreamUnavailable(RuntimeError):
    """An external collaborator failed or refused the call."""


class Unauthorized(ValueError):
    """A bearer token is missing or fails verification."""


class InsufficientCredits(RuntimeError):
    """The user has no prediction credits left."""


class CreditsConflict(RuntimeError):
    """The credits balance changed between read and decrement."""


class DuplicateStock(RuntimeError):
    """The symbol is already present in the user's portfolio."""
