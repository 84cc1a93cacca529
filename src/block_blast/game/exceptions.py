"""Errors raised by the block blast engine.

None of these are fatal: a rejected turn leaves the session untouched.
"""


class BlockBlastError(Exception):
    pass


class InvalidPlacementError(BlockBlastError):
    """The block does not fit at the requested anchor (bounds or occupancy)."""


class UnknownBlockIndexError(InvalidPlacementError):
    """The pool index is stale or out of range."""


class GameOverError(BlockBlastError):
    """A turn was attempted after the session reached game over."""
