"""Identifier generation."""

import uuid


def new_identifier() -> str:
    """Return a new random, globally unique identifier string."""
    return str(uuid.uuid4())
