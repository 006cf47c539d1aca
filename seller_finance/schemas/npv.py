# This project was developed with assistance from AI tools.
"""NPV solver request/response schemas."""

from pydantic import BaseModel, ConfigDict, Field

from ..enums import ScheduleKind


class NPVInputs(BaseModel):
    """Input for the NPV solver.

    Exactly one of ``target_pv`` or ``target_nominal`` selects the solving mode.
    """

    target_pv: float | None = Field(
        default=None,
        description="Desired total present value, usually the catalog cash price.",
    )
    target_nominal: float | None = Field(
        default=None,
        description="Desired undiscounted sum of down payment and installments.",
    )
    monthly_rate: float = Field(description="Monthly discount rate as a decimal fraction.")
    down_amount: float = Field(ge=0)
    down_year: int = Field(ge=1900, le=2200)
    down_month: int = Field(ge=1, le=12)
    n_installments: int
    start_year: int = Field(ge=1900, le=2200)
    start_month: int = Field(ge=1, le=12)


class ScheduleEntry(BaseModel):
    """One dated payment."""

    date: str = Field(description="Calendar month in YYYY-MM format.")
    amount: float
    kind: ScheduleKind = ScheduleKind.INSTALLMENT


class ModelResult(BaseModel):
    """Solved plan for one cash-flow model."""

    monthly_installment: float
    nominal_total: float
    present_value: float
    schedule: list[ScheduleEntry]


class NPVResult(BaseModel):
    """Both cash-flow models solved against the same inputs."""

    model_config = ConfigDict(protected_namespaces=())

    model_a: ModelResult = Field(description="Concurrent model.")
    model_b: ModelResult = Field(description="Skip model.")
    down_payment_pv: float
    down_payment_date: str
