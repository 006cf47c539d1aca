# This project was developed with assistance from AI tools.
"""Shared schema components."""

from pydantic import BaseModel, ConfigDict


class FinancingParameters(BaseModel):
    """Financing slots collected so far in a planning session.

    Every field is optional because the conversation fills them one turn at a
    time. ``monthly_rate`` is always a decimal fraction (0.02 == 2 %).
    """

    model_config = ConfigDict(frozen=True)

    monthly_rate: float | None = None
    down_amount: float | None = None
    down_year: int | None = None
    down_month: int | None = None
    n_installments: int | None = None
    start_year: int | None = None
    start_month: int | None = None
