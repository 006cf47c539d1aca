# This project was developed with assistance from AI tools.
"""NPV-based installment solver for seller financing.

Pure math, no I/O. Shared by the HTTP calculator route, the alternative
matcher and the conversation engine.

Two solving modes:
    * target present value -- solve the installment T per model so the plan's
      present value equals the target (usually the cash price);
    * target nominal total -- T is fixed by the nominal sum, and each model's
      present value is reported.

Full float precision is kept; rounding belongs to presentation.
"""

import logging
import math

from ..enums import CashFlowModel
from ..schemas.npv import ModelResult, NPVInputs, NPVResult
from .discounting import format_year_month, geometric_sum_discount, months_between, present_value
from .schedule import build_schedule, model_offsets, schedule_present_value

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when the inputs do not select exactly one solving mode."""


class DegenerateInputError(ValueError):
    """Raised when the inputs would divide by zero or discount at rate <= -100 %."""


def discount_sum(
    model: CashFlowModel,
    n_installments: int,
    rate: float,
    down_offset: int,
) -> float:
    """Discount factor sum for one unit paid at each of ``model``'s installment offsets."""
    if model is CashFlowModel.SKIP and 1 <= down_offset <= n_installments + 1:
        return geometric_sum_discount(n_installments + 1, rate, 1, skip_offset=down_offset)
    return geometric_sum_discount(n_installments, rate, 1)


def calculate_npv(inputs: NPVInputs) -> NPVResult:
    """Solve both cash-flow models for the given inputs.

    Raises:
        InvalidInputError: neither or both of target_pv / target_nominal supplied.
        DegenerateInputError: n_installments <= 0, monthly_rate <= -1, a zero
            discount sum, or discount factors too large for a float.
    """
    if (inputs.target_pv is None) == (inputs.target_nominal is None):
        raise InvalidInputError("Exactly one of target_pv or target_nominal must be provided")

    n = inputs.n_installments
    rate = inputs.monthly_rate
    if n <= 0:
        raise DegenerateInputError(f"Installment count must be positive, got {n}")
    if rate <= -1:
        raise DegenerateInputError(f"Monthly rate must be greater than -1, got {rate}")

    down_offset = months_between(
        inputs.start_year, inputs.start_month, inputs.down_year, inputs.down_month
    )
    try:
        down_pv = present_value(inputs.down_amount, down_offset, rate)

        installments: dict[CashFlowModel, float] = {}
        if inputs.target_pv is not None:
            remaining_pv = inputs.target_pv - down_pv
            for model in CashFlowModel:
                factor = discount_sum(model, n, rate, down_offset)
                if factor == 0:
                    raise DegenerateInputError(f"Discount sum for {model.value} model is zero")
                if not math.isfinite(factor):
                    raise OverflowError(f"Discount sum for {model.value} model is not finite")
                installments[model] = remaining_pv / factor
        else:
            common = (inputs.target_nominal - inputs.down_amount) / n
            installments = {model: common for model in CashFlowModel}

        results = {
            model: _solve_model(inputs, model, installments[model], down_offset, down_pv)
            for model in CashFlowModel
        }
    except OverflowError as exc:
        raise DegenerateInputError(
            f"Discounting at rate {rate} over {n} installments overflows"
        ) from exc
    logger.debug(
        "Solved plan: n=%d rate=%.6f down_offset=%d T_concurrent=%.2f T_skip=%.2f",
        n,
        rate,
        down_offset,
        installments[CashFlowModel.CONCURRENT],
        installments[CashFlowModel.SKIP],
    )

    return NPVResult(
        model_a=results[CashFlowModel.CONCURRENT],
        model_b=results[CashFlowModel.SKIP],
        down_payment_pv=down_pv,
        down_payment_date=format_year_month(inputs.down_year, inputs.down_month),
    )


def _solve_model(
    inputs: NPVInputs,
    model: CashFlowModel,
    installment: float,
    down_offset: int,
    down_pv: float,
) -> ModelResult:
    offsets = model_offsets(model, inputs.n_installments, down_offset)
    schedule = build_schedule(offsets, installment, inputs.start_year, inputs.start_month)
    schedule_pv = schedule_present_value(
        schedule, inputs.start_year, inputs.start_month, inputs.monthly_rate
    )
    return ModelResult(
        monthly_installment=installment,
        nominal_total=inputs.down_amount + installment * inputs.n_installments,
        present_value=down_pv + schedule_pv,
        schedule=schedule,
    )


def preferred_model(result: NPVResult) -> tuple[CashFlowModel, ModelResult]:
    """The model with the lower nominal total; Concurrent wins ties."""
    if result.model_b.nominal_total < result.model_a.nominal_total:
        return CashFlowModel.SKIP, result.model_b
    return CashFlowModel.CONCURRENT, result.model_a
