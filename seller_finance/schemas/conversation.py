# This project was developed with assistance from AI tools.
"""Conversation context schemas.

The context is a tagged union keyed on ``step``. Each variant carries only the
fields guaranteed to be present at that point of the dialogue, so transitions
never need presence checks. Variants are frozen: the engine returns a new
context every turn and the caller persists it.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..enums import ConversationStep, RateUnit
from . import FinancingParameters
from .npv import NPVResult


class SessionBase(BaseModel):
    """Fields every session carries: the calendar month the plan starts from."""

    model_config = ConfigDict(frozen=True)

    start_year: int = Field(ge=1900, le=2200)
    start_month: int = Field(ge=1, le=12)

    def financing_parameters(self) -> FinancingParameters:
        """Project whatever slots this variant holds onto FinancingParameters."""
        return FinancingParameters(
            **{name: getattr(self, name, None) for name in FinancingParameters.model_fields}
        )


class PropertyChosen(SessionBase):
    property_id: str


class RateKnown(PropertyChosen):
    monthly_rate: float = Field(gt=-1, description="Decimal fraction, 0.02 == 2 %.")


class DownAmountKnown(RateKnown):
    down_amount: float = Field(ge=0)


class DownYearKnown(DownAmountKnown):
    down_year: int


class DownDateKnown(DownYearKnown):
    down_month: int = Field(ge=1, le=12)


class PlanComputed(DownDateKnown):
    """A fully specified plan plus the last solver result for it."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    n_installments: int = Field(gt=0)
    last_result: NPVResult


class CollectingProperty(SessionBase):
    step: Literal[ConversationStep.COLLECTING_PROPERTY] = ConversationStep.COLLECTING_PROPERTY


class CollectingRate(PropertyChosen):
    step: Literal[ConversationStep.COLLECTING_RATE] = ConversationStep.COLLECTING_RATE
    rate_unit: RateUnit | None = None
    pending_rate: float | None = Field(
        default=None,
        description="Rate typed before its unit was known, as a decimal fraction.",
    )


class CollectingDownAmount(RateKnown):
    step: Literal[ConversationStep.COLLECTING_DOWN_AMOUNT] = (
        ConversationStep.COLLECTING_DOWN_AMOUNT
    )


class CollectingDownYear(DownAmountKnown):
    step: Literal[ConversationStep.COLLECTING_DOWN_YEAR] = ConversationStep.COLLECTING_DOWN_YEAR


class CollectingDownMonth(DownYearKnown):
    step: Literal[ConversationStep.COLLECTING_DOWN_MONTH] = ConversationStep.COLLECTING_DOWN_MONTH


class CollectingInstallmentCount(DownDateKnown):
    step: Literal[ConversationStep.COLLECTING_INSTALLMENT_COUNT] = (
        ConversationStep.COLLECTING_INSTALLMENT_COUNT
    )


class Completed(PlanComputed):
    step: Literal[ConversationStep.COMPLETED] = ConversationStep.COMPLETED


class Negotiating(PlanComputed):
    """Scratch fields of the lower-installment sub-flow."""

    desired_installment: float | None = None
    suggested_down_amount: float | None = Field(
        default=None,
        description="Down payment proposed to the user, committed only on confirmation.",
    )


class AwaitingLowerInstallment(Negotiating):
    step: Literal[ConversationStep.AWAITING_LOWER_INSTALLMENT] = (
        ConversationStep.AWAITING_LOWER_INSTALLMENT
    )


class ShowingAlternatives(Negotiating):
    step: Literal[ConversationStep.SHOWING_ALTERNATIVES] = ConversationStep.SHOWING_ALTERNATIVES
    desired_installment: float
    alternatives: tuple[str, ...] = Field(
        description="Ranked property ids, selectable by 1-based position."
    )


ConversationContext = Annotated[
    Union[
        CollectingProperty,
        CollectingRate,
        CollectingDownAmount,
        CollectingDownYear,
        CollectingDownMonth,
        CollectingInstallmentCount,
        Completed,
        AwaitingLowerInstallment,
        ShowingAlternatives,
    ],
    Field(discriminator="step"),
]


class TurnRequest(BaseModel):
    """One user utterance plus the context returned by the previous turn."""

    utterance: str = ""
    context: ConversationContext | None = None


class TurnResult(BaseModel):
    """Reply text, the solver result when one was produced, and the next context."""

    reply: str
    npv_result: NPVResult | None = None
    context: ConversationContext
