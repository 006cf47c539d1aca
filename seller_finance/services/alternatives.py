# This project was developed with assistance from AI tools.
"""Alternative property matching and installment-lowering proposals.

Every helper re-runs the NPV solver in target-present-value mode and reads the
Concurrent (Model A) installment, which is the figure quoted to users when
comparing units.
"""

import functools
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..core.config import settings
from ..schemas.npv import NPVInputs
from ..schemas.property import Property
from .catalog import parse_delivery_months
from .npv import DegenerateInputError, InvalidInputError, calculate_npv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlternativeMatch:
    """A catalog unit whose installment lands inside the tolerance band."""

    property: Property
    monthly_installment: float
    delivery_months: int
    distance: float


@dataclass(frozen=True)
class DownPaymentSuggestion:
    down_amount: float
    monthly_installment: float


def installment_for_price(
    plan: NPVInputs,
    price: float,
    n_installments: int | None = None,
) -> float:
    """Model A installment that pays off ``price`` under ``plan``'s down payment and rate.

    ``plan`` supplies everything but the target; ``n_installments`` overrides its term.
    """
    update: dict = {"target_pv": price, "target_nominal": None}
    if n_installments is not None:
        update["n_installments"] = n_installments
    return calculate_npv(plan.model_copy(update=update)).model_a.monthly_installment


def within_tolerance(installment: float, desired: float, tolerance: float) -> bool:
    return desired - tolerance <= installment <= desired + tolerance


def find_alternatives(
    catalog: Sequence[Property],
    desired_installment: float,
    plan: NPVInputs,
    *,
    exclude_id: str,
    tolerance: float | None = None,
    limit: int | None = None,
) -> list[AlternativeMatch]:
    """Rank other catalog units by how close their installment is to ``desired_installment``.

    Each unit is re-solved with its own cash price and the plan's down payment,
    dates, term and rate. Units priced below the down payment, outside
    ``desired +/- tolerance`` or with a non-positive installment are dropped, as
    are units the solver rejects.
    Closest first; when two distances differ by less than the configured tie
    window, the longer delivery duration wins.
    """
    if tolerance is None:
        tolerance = settings.ALTERNATIVE_TOLERANCE
    if limit is None:
        limit = settings.MAX_ALTERNATIVES

    excluded = exclude_id.upper()
    matches: list[AlternativeMatch] = []
    for prop in catalog:
        if prop.id.upper() == excluded or prop.cash_price < plan.down_amount:
            continue
        try:
            installment = installment_for_price(plan, prop.cash_price)
        except (InvalidInputError, DegenerateInputError) as exc:
            logger.debug("Skipping %s as alternative: %s", prop.id, exc)
            continue
        if installment <= 0 or not within_tolerance(installment, desired_installment, tolerance):
            continue
        matches.append(
            AlternativeMatch(
                property=prop,
                monthly_installment=installment,
                delivery_months=parse_delivery_months(prop.delivery_duration),
                distance=abs(installment - desired_installment),
            )
        )

    matches.sort(key=functools.cmp_to_key(_compare_matches))
    logger.debug(
        "Alternatives for %.2f (+/- %.2f): %d of %d units match",
        desired_installment,
        tolerance,
        len(matches),
        len(catalog),
    )
    return matches[:limit]


def _compare_matches(a: AlternativeMatch, b: AlternativeMatch) -> float:
    if abs(a.distance - b.distance) < settings.DELIVERY_TIE_WINDOW:
        return b.delivery_months - a.delivery_months
    return a.distance - b.distance


def search_down_payment(
    plan: NPVInputs,
    price: float,
    desired_installment: float,
    *,
    tolerance: float | None = None,
) -> DownPaymentSuggestion | None:
    """Smallest raised down payment that brings the installment into the band.

    Steps up from the plan's current down payment in fixed increments and
    stops at the configured share of ``price``, so the search always ends.
    """
    if tolerance is None:
        tolerance = settings.ALTERNATIVE_TOLERANCE
    step = settings.DOWN_PAYMENT_STEP
    ceiling = price * settings.DOWN_PAYMENT_CEILING_RATIO

    candidate = plan.down_amount + step
    while candidate <= ceiling:
        raised = plan.model_copy(update={"down_amount": candidate})
        installment = installment_for_price(raised, price)
        if within_tolerance(installment, desired_installment, tolerance):
            return DownPaymentSuggestion(down_amount=candidate, monthly_installment=installment)
        candidate += step
    return None
