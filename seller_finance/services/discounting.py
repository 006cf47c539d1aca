# This project was developed with assistance from AI tools.
"""Month-offset arithmetic and present-value primitives.

Pure math, no I/O. Compounding is discrete and monthly throughout.
"""


def months_between(start_year: int, start_month: int, end_year: int, end_month: int) -> int:
    """Signed number of calendar months from (start_year, start_month) to (end_year, end_month)."""
    return (end_year - start_year) * 12 + (end_month - start_month)


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Return the (year, month) lying ``offset`` months after (year, month)."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def format_year_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def parse_year_month(value: str) -> tuple[int, int]:
    """Inverse of format_year_month."""
    year, month = value.split("-")
    return int(year), int(month)


def present_value(amount: float, months_ahead: int, rate: float) -> float:
    """Discount ``amount`` due ``months_ahead`` months from now at monthly ``rate``.

    Valid for any integer offset, including zero and negative offsets.
    """
    return amount * (1 + rate) ** -months_ahead


def geometric_sum_discount(
    n: int,
    rate: float,
    start_offset: int = 1,
    skip_offset: int | None = None,
) -> float:
    """Sum 1/(1+rate)^k over ``n`` consecutive offsets starting at ``start_offset``.

    The term whose offset equals ``skip_offset`` is omitted, so a skip inside the
    window leaves ``n - 1`` terms. Dividing a target present value by this sum
    gives the uniform payment that reproduces it.
    """
    total = 0.0
    for k in range(start_offset, start_offset + n):
        if skip_offset is not None and k == skip_offset:
            continue
        total += (1 + rate) ** -k
    return total


def annual_to_monthly_rate(annual_rate: float) -> float:
    """Equivalent monthly rate for an annual rate, both as decimal fractions."""
    return (1 + annual_rate) ** (1 / 12) - 1
