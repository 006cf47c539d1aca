# This project was developed with assistance from AI tools.
"""Shared route dependencies."""

from collections.abc import Sequence

from fastapi import Request

from ..schemas.property import Property


def get_catalog(request: Request) -> Sequence[Property]:
    """The read-only catalog the application was created with."""
    return request.app.state.catalog
