# This project was developed with assistance from AI tools.
"""Property catalog schemas."""

from pydantic import BaseModel, ConfigDict, Field

PROPERTY_ID_PATTERN = r"[A-Za-z]+-[A-Za-z0-9]+-\d+"


class Property(BaseModel):
    """A unit offered for sale, as supplied by the external catalog."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(pattern=rf"^{PROPERTY_ID_PATTERN}$")
    project_name: str = ""
    city: str = ""
    district: str = ""
    neighborhood: str = ""
    block: str = ""
    floor: int = 0
    room_layout: str = ""
    area_sqm: float = Field(default=0, ge=0)
    delivery_duration: str = Field(
        default="",
        description="Free-text delivery duration, e.g. '18 months' or '18 ay'.",
    )
    delivery_date: str = ""
    cash_price: float = Field(ge=0, description="Present cash price of the unit.")
