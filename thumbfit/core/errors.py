from __future__ import annotations


class InvalidInputError(ValueError):
    """A natural size or bounds box that is only partly specified."""
