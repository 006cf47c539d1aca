# This project was developed with assistance from AI tools.
"""Stateless calculator routes: NPV solving and alternative matching."""

from collections.abc import Sequence

from fastapi import APIRouter, Depends

from ..schemas.alternatives import AlternativeMatchResponse, AlternativeRequest
from ..schemas.npv import NPVInputs, NPVResult
from ..schemas.property import Property
from ..services.alternatives import find_alternatives
from ..services.catalog import get_property
from ..services.npv import calculate_npv
from .deps import get_catalog

router = APIRouter()


@router.post("/npv", response_model=NPVResult)
async def solve_npv(req: NPVInputs) -> NPVResult:
    """Solve both cash-flow models.

    Exactly one of ``target_pv`` / ``target_nominal`` must be set; inputs the
    solver rejects come back as 422 problem responses.
    """
    return calculate_npv(req)


@router.post("/alternatives", response_model=list[AlternativeMatchResponse])
async def list_alternatives(
    req: AlternativeRequest,
    catalog: Sequence[Property] = Depends(get_catalog),
) -> list[AlternativeMatchResponse]:
    """Rank other catalog units whose installment lands near ``desired_installment``."""
    current = get_property(catalog, req.property_id)
    plan = NPVInputs(
        monthly_rate=req.monthly_rate,
        down_amount=req.down_amount,
        down_year=req.down_year,
        down_month=req.down_month,
        n_installments=req.n_installments,
        start_year=req.start_year,
        start_month=req.start_month,
    )
    matches = find_alternatives(
        catalog,
        req.desired_installment,
        plan,
        exclude_id=current.id,
        tolerance=req.tolerance,
    )
    return [
        AlternativeMatchResponse(
            property=match.property,
            monthly_installment=match.monthly_installment,
            delivery_months=match.delivery_months,
            distance=match.distance,
        )
        for match in matches
    ]
