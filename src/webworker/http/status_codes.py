"""
=============================================================================
RESOURCE STATUS
=============================================================================

A response can only ever be one of two things:

    ┌────────────┬──────┬────────────────┬──────────────────────────────┐
    │  Status    │ Code │ Reason phrase  │ When                         │
    ├────────────┼──────┼────────────────┼──────────────────────────────┤
    │  FOUND     │ 200  │ OK             │ resource opened for reading  │
    │  NOT_FOUND │ 404  │ Not Found      │ anything else                │
    └────────────┴──────┴────────────────┴──────────────────────────────┘

The status is decided ONCE per connection, before the first byte of the
response is written, and every later stage reads that single value.

=============================================================================
"""

from enum import Enum


class ResourceStatus(Enum):
    """
    Outcome of looking up the requested resource.

        >>> ResourceStatus.FOUND.code
        200
        >>> ResourceStatus.NOT_FOUND.phrase
        'Not Found'
    """

    FOUND = (200, "OK")
    NOT_FOUND = (404, "Not Found")

    @property
    def code(self) -> int:
        """Numeric HTTP status code."""
        return self.value[0]

    @property
    def phrase(self) -> str:
        """Reason phrase used in the status line."""
        return self.value[1]

    @property
    def is_found(self) -> bool:
        return self is ResourceStatus.FOUND

    def __str__(self) -> str:
        return f"{self.code} {self.phrase}"
