# This project was developed with assistance from AI tools.
"""
Domain enums for seller-financing plans and the planning conversation.

Shared by the solver schemas, the conversation engine and the HTTP layer.
"""

import enum


class ScheduleKind(str, enum.Enum):
    INSTALLMENT = "installment"
    DOWN_PAYMENT = "down_payment"


class CashFlowModel(str, enum.Enum):
    CONCURRENT = "concurrent"  # Model A
    SKIP = "skip"  # Model B


class RateUnit(str, enum.Enum):
    ANNUAL = "annual"
    MONTHLY = "monthly"


class ConversationStep(str, enum.Enum):
    COLLECTING_PROPERTY = "collecting_property"
    COLLECTING_RATE = "collecting_rate"
    COLLECTING_DOWN_AMOUNT = "collecting_down_amount"
    COLLECTING_DOWN_YEAR = "collecting_down_year"
    COLLECTING_DOWN_MONTH = "collecting_down_month"
    COLLECTING_INSTALLMENT_COUNT = "collecting_installment_count"
    COMPLETED = "completed"
    AWAITING_LOWER_INSTALLMENT = "awaiting_lower_installment_value"
    SHOWING_ALTERNATIVES = "showing_alternatives"

    @classmethod
    def collection_steps(cls) -> frozenset["ConversationStep"]:
        """Steps that gather a financing slot after the property is chosen."""
        return frozenset(
            {
                cls.COLLECTING_RATE,
                cls.COLLECTING_DOWN_AMOUNT,
                cls.COLLECTING_DOWN_YEAR,
                cls.COLLECTING_DOWN_MONTH,
                cls.COLLECTING_INSTALLMENT_COUNT,
            }
        )

    @classmethod
    def negotiation_steps(cls) -> frozenset["ConversationStep"]:
        """Steps of the lower-installment sub-flow."""
        return frozenset({cls.AWAITING_LOWER_INSTALLMENT, cls.SHOWING_ALTERNATIVES})

    @classmethod
    def valid_transitions(cls) -> dict["ConversationStep", frozenset["ConversationStep"]]:
        """Allowed forward transitions; a restart may return any step to COLLECTING_PROPERTY."""
        return {
            cls.COLLECTING_PROPERTY: frozenset({cls.COLLECTING_RATE}),
            cls.COLLECTING_RATE: frozenset({cls.COLLECTING_DOWN_AMOUNT}),
            cls.COLLECTING_DOWN_AMOUNT: frozenset({cls.COLLECTING_DOWN_YEAR}),
            cls.COLLECTING_DOWN_YEAR: frozenset({cls.COLLECTING_DOWN_MONTH}),
            cls.COLLECTING_DOWN_MONTH: frozenset({cls.COLLECTING_INSTALLMENT_COUNT}),
            cls.COLLECTING_INSTALLMENT_COUNT: frozenset({cls.COMPLETED}),
            cls.COMPLETED: frozenset({cls.AWAITING_LOWER_INSTALLMENT, cls.COLLECTING_RATE}),
            cls.AWAITING_LOWER_INSTALLMENT: frozenset(
                {cls.SHOWING_ALTERNATIVES, cls.COMPLETED, cls.COLLECTING_RATE}
            ),
            cls.SHOWING_ALTERNATIVES: frozenset({cls.COMPLETED}),
        }
