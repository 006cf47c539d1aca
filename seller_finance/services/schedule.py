# This project was developed with assistance from AI tools.
"""Payment schedule builders for the two cash-flow models.

Model A (Concurrent) pays installments at offsets 1..n regardless of the down
payment. Model B (Skip) pays from offset 1 upward but leaves out the month the
down payment falls in, so its n installments span up to n + 1 months.
"""

from ..enums import CashFlowModel, ScheduleKind
from ..schemas.npv import ScheduleEntry
from .discounting import (
    format_year_month,
    months_between,
    parse_year_month,
    present_value,
    shift_month,
)


def concurrent_offsets(n_installments: int) -> list[int]:
    """Month offsets of Model A installments."""
    return skip_offsets(n_installments, skip_offset=None)


def skip_offsets(n_installments: int, skip_offset: int | None) -> list[int]:
    """Month offsets of installments that step over ``skip_offset``.

    Offsets start at 1 and continue until ``n_installments`` are placed. When
    ``skip_offset`` is None, not positive, or beyond the last offset reached,
    nothing is skipped and the result equals Model A's offsets.
    """
    offsets: list[int] = []
    k = 1
    while len(offsets) < n_installments:
        if k != skip_offset:
            offsets.append(k)
        k += 1
    return offsets


def model_offsets(
    model: CashFlowModel,
    n_installments: int,
    down_offset: int,
) -> list[int]:
    """Installment offsets for ``model`` given the down payment's month offset."""
    if model is CashFlowModel.CONCURRENT:
        return concurrent_offsets(n_installments)
    return skip_offsets(n_installments, down_offset)


def build_schedule(
    offsets: list[int],
    amount: float,
    start_year: int,
    start_month: int,
    kind: ScheduleKind = ScheduleKind.INSTALLMENT,
) -> list[ScheduleEntry]:
    """Turn month offsets into calendar-dated entries of a uniform amount."""
    return [
        ScheduleEntry(
            date=format_year_month(*shift_month(start_year, start_month, k)),
            amount=amount,
            kind=kind,
        )
        for k in offsets
    ]


def schedule_present_value(
    schedule: list[ScheduleEntry],
    start_year: int,
    start_month: int,
    rate: float,
) -> float:
    """Present value of every entry, discounted back to the start month."""
    total = 0.0
    for entry in schedule:
        year, month = parse_year_month(entry.date)
        months_ahead = months_between(start_year, start_month, year, month)
        total += present_value(entry.amount, months_ahead, rate)
    return total
