# This project was developed with assistance from AI tools.
"""Alternative property search schemas."""

from pydantic import BaseModel, Field

from .property import Property


class AlternativeRequest(BaseModel):
    """Find catalog units whose installment lands near a desired amount."""

    property_id: str = Field(description="Currently selected unit, excluded from results.")
    desired_installment: float = Field(gt=0)
    monthly_rate: float = Field(gt=-1)
    down_amount: float = Field(ge=0)
    down_year: int = Field(ge=1900, le=2200)
    down_month: int = Field(ge=1, le=12)
    n_installments: int = Field(gt=0)
    start_year: int = Field(ge=1900, le=2200)
    start_month: int = Field(ge=1, le=12)
    tolerance: float | None = Field(
        default=None,
        ge=0,
        description="Overrides the configured tolerance band when set.",
    )


class AlternativeMatchResponse(BaseModel):
    """One ranked candidate."""

    property: Property
    monthly_installment: float
    delivery_months: int
    distance: float
