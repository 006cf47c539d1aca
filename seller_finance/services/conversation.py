# This project was developed with assistance from AI tools.
"""Conversation engine for building a seller-financing plan.

``process_turn`` takes one user utterance and the context returned by the
previous turn, and returns a reply plus the next context. It performs no I/O:
the caller owns persistence and the property catalog. Every recoverable error
is turned into a reply and the context stays where it was.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import date

from ..core.config import settings
from ..enums import ConversationStep, RateUnit
from ..schemas.conversation import (
    AwaitingLowerInstallment,
    CollectingDownAmount,
    CollectingDownMonth,
    CollectingDownYear,
    CollectingInstallmentCount,
    CollectingProperty,
    CollectingRate,
    Completed,
    ConversationContext,
    DownDateKnown,
    Negotiating,
    PlanComputed,
    ShowingAlternatives,
    TurnResult,
)
from ..schemas.npv import NPVInputs, NPVResult
from ..schemas.property import Property
from .alternatives import (
    find_alternatives,
    installment_for_price,
    search_down_payment,
    within_tolerance,
)
from .catalog import PropertyNotFoundError, find_property, get_property
from .discounting import annual_to_monthly_rate, format_year_month, months_between
from .npv import DegenerateInputError, InvalidInputError, calculate_npv, preferred_model
from .slot_parsing import (
    asks_down_payment_increase,
    is_affirmative,
    is_greeting,
    is_help_request,
    is_negative,
    parse_list_ordinal,
    parse_property_id,
    parse_rate,
    parse_rate_unit_answer,
    parse_slot,
    parse_term_request,
    wants_lower_installment,
)

logger = logging.getLogger(__name__)


class ConstraintViolation(ValueError):
    """Raised when a parsed value breaks a financing rule; the message is shown to the user."""


_MONTH_LABELS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)  # fmt: skip

# Human-readable label for each step, used by the help reply.
STEP_LABELS: dict[ConversationStep, str] = {
    ConversationStep.COLLECTING_PROPERTY: "choosing a property",
    ConversationStep.COLLECTING_RATE: "entering the discount rate",
    ConversationStep.COLLECTING_DOWN_AMOUNT: "entering the down payment",
    ConversationStep.COLLECTING_DOWN_YEAR: "entering the down payment year",
    ConversationStep.COLLECTING_DOWN_MONTH: "entering the down payment month",
    ConversationStep.COLLECTING_INSTALLMENT_COUNT: "entering the installment count",
    ConversationStep.COMPLETED: "reviewing the computed plan",
    ConversationStep.AWAITING_LOWER_INSTALLMENT: "looking for a lower installment",
    ConversationStep.SHOWING_ALTERNATIVES: "choosing among alternative properties",
}

# Round-off noise from the solver must not read as negative interest.
_INTEREST_EPSILON = 1e-6

_RETRY_REPLY = "I could not compute a plan from these values. Please try a different answer."


def _money(amount: float) -> str:
    return f"{amount:,.0f}"


def _percent(rate: float) -> str:
    return f"{rate * 100:.4g} %"


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def new_session(today: date | None = None) -> CollectingProperty:
    """Initial context; the plan starts in the current calendar month."""
    today = today or date.today()
    return CollectingProperty(start_year=today.year, start_month=today.month)


def process_turn(
    utterance: str,
    context: ConversationContext | None,
    catalog: Sequence[Property],
    *,
    today: date | None = None,
) -> TurnResult:
    """Advance the conversation by one user turn.

    ``context=None`` starts a new session. Greeting and help keywords are
    honoured in every state; everything else goes to the handler of the
    current step.
    """
    text = utterance.strip()
    if context is None:
        context = new_session(today)
        if not text:
            return TurnResult(reply=_welcome_text(context), context=context)

    if is_greeting(text):
        fresh = new_session(today)
        logger.info("Conversation restarted from %s", context.step.value)
        if not parse_property_id(text)[0]:
            return TurnResult(reply=_welcome_text(fresh), context=fresh)
        # "new plan for <id>" restarts and picks the property in the same turn.
        context = fresh
    if is_help_request(text):
        return TurnResult(reply=_help_text(context), context=context)
    if context.step in ConversationStep.collection_steps() and parse_property_id(text)[0]:
        # The property is fixed once collection has started.
        return _stay(context)

    handler = _HANDLERS[context.step]
    try:
        return handler(text, context, catalog)
    except ConstraintViolation as exc:
        logger.warning("Rejected value at %s: %s", context.step.value, exc)
        return TurnResult(reply=f"{exc}\n{_prompt(context)}", context=context)
    except PropertyNotFoundError as exc:
        logger.warning("Property lookup failed at %s: %s", context.step.value, exc)
        fresh = new_session(today)
        return TurnResult(
            reply=f"{exc} in the catalog.\n{_prompt(fresh)}",
            context=fresh,
        )
    except (InvalidInputError, DegenerateInputError) as exc:
        logger.warning("Solver rejected inputs at %s: %s", context.step.value, exc)
        return TurnResult(reply=f"{_RETRY_REPLY}\n{_prompt(context)}", context=context)


def _advance(
    context: ConversationContext,
    new_context: ConversationContext,
    reply: str,
    npv_result: NPVResult | None = None,
) -> TurnResult:
    """Build the turn result, logging the step change."""
    if new_context.step != context.step:
        allowed = ConversationStep.valid_transitions()[context.step]
        if new_context.step not in allowed:
            logger.warning(
                "Unexpected transition %s -> %s", context.step.value, new_context.step.value
            )
        else:
            logger.info("Conversation %s -> %s", context.step.value, new_context.step.value)
    return TurnResult(reply=reply, npv_result=npv_result, context=new_context)


def _stay(context: ConversationContext, message: str = "") -> TurnResult:
    reply = f"{message}\n{_prompt(context)}" if message else _prompt(context)
    return TurnResult(reply=reply, context=context)


def _carry(context: ConversationContext, target: type, **updates) -> ConversationContext:
    """Build ``target`` from the fields ``context`` already holds, plus ``updates``."""
    data = {
        name: getattr(context, name)
        for name in target.model_fields
        if name != "step" and hasattr(context, name)
    }
    data.update(updates)
    return target(**data)


def _slot_value(context: ConversationContext, text: str, default=None) -> tuple[bool, str, object]:
    """Parse the active step's slot; empty input takes ``default`` when one is given."""
    if not text and default is not None:
        return True, "", default
    return parse_slot(context.step, text)


def _fresh_property(context: ConversationContext, prop: Property) -> CollectingRate:
    """Drop every financing slot and restart collection for ``prop``."""
    return CollectingRate(
        start_year=context.start_year, start_month=context.start_month, property_id=prop.id
    )


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


def _prompt(context: ConversationContext) -> str:
    step = context.step
    if step == ConversationStep.COLLECTING_PROPERTY:
        return "Which property are you interested in? Please write its id, e.g. GZP-H04-001."
    if step == ConversationStep.COLLECTING_RATE:
        if context.pending_rate is not None:
            return (
                f"Is {_percent(context.pending_rate)} an annual or a monthly rate? "
                "(annual/monthly)"
            )
        if context.rate_unit is None:
            return "Will you enter an annual rate? (yes = annual, no or empty = monthly)"
        return f"What is your {context.rate_unit.value} discount rate? (e.g. 2 or %2)"
    if step == ConversationStep.COLLECTING_DOWN_AMOUNT:
        return "How much down payment will you pay? (0 for none)"
    if step == ConversationStep.COLLECTING_DOWN_YEAR:
        return (
            "In which year will you pay the down payment? "
            f"(YYYY, empty for {context.start_year})"
        )
    if step == ConversationStep.COLLECTING_DOWN_MONTH:
        return (
            "In which month? (1-12 or a month name, "
            f"empty for {_MONTH_LABELS[context.start_month - 1]})"
        )
    if step == ConversationStep.COLLECTING_INSTALLMENT_COUNT:
        return (
            "How many monthly installments? "
            f"(empty for {settings.DEFAULT_INSTALLMENTS})"
        )
    if step in ConversationStep.negotiation_steps() and context.suggested_down_amount is not None:
        suggested = _money(context.suggested_down_amount)
        return f"Shall I raise the down payment to {suggested}? (yes/no)"
    if step == ConversationStep.COMPLETED:
        return (
            'Say "lower installment" to look for a smaller payment, write another '
            'property id to start a new plan, or "restart" to begin again.'
        )
    if step == ConversationStep.AWAITING_LOWER_INSTALLMENT:
        return "What monthly installment would suit you? (e.g. 40000)"
    if step == ConversationStep.SHOWING_ALTERNATIVES:
        return "Which property would you like? Reply with its number in the list or its id."
    return ""


def _welcome_text(context: CollectingProperty) -> str:
    return (
        "Hello! I will help you plan seller financing for a property.\n"
        "I will ask for the property, your discount rate, the down payment and its "
        "date, and the number of installments, then compute the monthly payment "
        "under two payment schedules.\n"
        f"Plans start from {format_year_month(context.start_year, context.start_month)}.\n"
        f"{_prompt(context)}"
    )


def _help_text(context: ConversationContext) -> str:
    lines = [f"We are currently {STEP_LABELS[context.step]}."]
    if getattr(context, "property_id", None):
        lines.append(f"Property: {context.property_id}")
    params = context.financing_parameters()
    if params.monthly_rate is not None:
        lines.append(f"Monthly rate: {_percent(params.monthly_rate)}")
    if params.down_amount is not None:
        lines.append(f"Down payment: {_money(params.down_amount)}")
    if params.down_year is not None and params.down_month is not None:
        lines.append(f"Down payment date: {format_year_month(params.down_year, params.down_month)}")
    elif params.down_year is not None:
        lines.append(f"Down payment year: {params.down_year}")
    if params.n_installments is not None:
        lines.append(f"Installments: {params.n_installments}")
    lines.append('Say "restart" at any time to begin a new plan.')
    lines.append(_prompt(context))
    return "\n".join(lines)


def _describe_property(prop: Property) -> str:
    location = ", ".join(part for part in (prop.district, prop.city) if part)
    details = [part for part in (prop.project_name, location, prop.room_layout) if part]
    if prop.area_sqm:
        details.append(f"{prop.area_sqm:g} m2")
    summary = f"{prop.id}"
    if details:
        summary += f" ({', '.join(details)})"
    return f"{summary}, cash price {_money(prop.cash_price)}"


def _plan_summary(prop: Property, context: PlanComputed, result: NPVResult) -> str:
    _, best = preferred_model(result)
    n = context.n_installments
    lines = [
        f"Plan for {_describe_property(prop)}:",
        f"Down payment: {_money(context.down_amount)} in {result.down_payment_date} "
        f"(present value {_money(result.down_payment_pv)})",
        f"Concurrent schedule: {n} x {_money(result.model_a.monthly_installment)}"
        f", total {_money(result.model_a.nominal_total)}",
        f"Skip schedule: {n} x {_money(result.model_b.monthly_installment)}"
        f", total {_money(result.model_b.nominal_total)}",
    ]
    if result.model_a.nominal_total == result.model_b.nominal_total:
        lines.append("Both schedules cost the same in total.")
    elif best is result.model_b:
        lines.append("The skip schedule costs less in total.")
    else:
        lines.append("The concurrent schedule costs less in total.")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Solving
# ---------------------------------------------------------------------------


def _plan_inputs(
    context: DownDateKnown,
    n_installments: int,
    *,
    down_amount: float | None = None,
) -> NPVInputs:
    """Solver inputs for ``context``'s plan without a target."""
    return NPVInputs(
        monthly_rate=context.monthly_rate,
        down_amount=context.down_amount if down_amount is None else down_amount,
        down_year=context.down_year,
        down_month=context.down_month,
        n_installments=n_installments,
        start_year=context.start_year,
        start_month=context.start_month,
    )


def _solve_for_price(plan: NPVInputs, price: float) -> NPVResult:
    """Solve ``plan`` against ``price`` and reject plans that make no financial sense."""
    if plan.down_amount > price:
        raise ConstraintViolation(
            f"The down payment of {_money(plan.down_amount)} exceeds "
            f"the cash price of {_money(price)}."
        )
    result = calculate_npv(plan.model_copy(update={"target_pv": price}))
    for label, model in (("concurrent", result.model_a), ("skip", result.model_b)):
        if model.monthly_installment < 0:
            raise ConstraintViolation(
                f"The {label} schedule would need a negative installment. "
                "The down payment covers more than the price."
            )
        if model.nominal_total - price < -_INTEREST_EPSILON:
            raise ConstraintViolation(
                f"The {label} schedule would pay less than the cash price in total. "
                "Please check the rate."
            )
    return result


def _complete(
    context: ConversationContext,
    prop: Property,
    plan: NPVInputs,
    intro: str = "",
) -> TurnResult:
    result = _solve_for_price(plan, prop.cash_price)
    completed = _carry(
        context,
        Completed,
        property_id=prop.id,
        down_amount=plan.down_amount,
        n_installments=plan.n_installments,
        last_result=result,
    )
    reply = _plan_summary(prop, completed, result)
    if intro:
        reply = f"{intro}\n{reply}"
    reply = f"{reply}\n{_prompt(completed)}"
    return _advance(context, completed, reply, npv_result=result)


# ---------------------------------------------------------------------------
# Collection handlers
# ---------------------------------------------------------------------------


def _handle_collecting_property(
    text: str, context: CollectingProperty, catalog: Sequence[Property]
) -> TurnResult:
    ok, _, property_id = parse_property_id(text)
    if not ok:
        return _stay(context)
    prop = find_property(catalog, property_id)
    if prop is None:
        return _stay(context, f"Property {property_id} was not found in the catalog.")
    new_context = _fresh_property(context, prop)
    return _advance(context, new_context, f"{_describe_property(prop)}\n{_prompt(new_context)}")


def _rate_chosen(context: CollectingRate, rate: float, unit: RateUnit) -> TurnResult:
    if unit is RateUnit.ANNUAL:
        monthly = annual_to_monthly_rate(rate)
        note = f"An annual rate of {_percent(rate)} equals {_percent(monthly)} per month."
    else:
        monthly = rate
        note = f"Monthly rate set to {_percent(monthly)}."
    new_context = _carry(context, CollectingDownAmount, monthly_rate=monthly)
    return _advance(context, new_context, f"{note}\n{_prompt(new_context)}")


def _handle_collecting_rate(
    text: str, context: CollectingRate, catalog: Sequence[Property]
) -> TurnResult:
    rate_ok, rate_message, parsed = parse_rate(text)
    if rate_ok and parsed.unit is not None:
        return _rate_chosen(context, parsed.rate, parsed.unit)

    if context.pending_rate is not None:
        unit_ok, unit_message, unit = parse_rate_unit_answer(text)
        if unit_ok:
            return _rate_chosen(context, context.pending_rate, unit)
        return _stay(context, unit_message)

    if context.rate_unit is not None:
        if rate_ok:
            return _rate_chosen(context, parsed.rate, context.rate_unit)
        return _stay(context, rate_message)

    if rate_ok:
        pending = context.model_copy(update={"pending_rate": parsed.rate})
        return _stay(pending)
    unit_ok, unit_message, unit = parse_rate_unit_answer(text)
    if unit_ok:
        return _stay(context.model_copy(update={"rate_unit": unit}))
    return _stay(context, unit_message)


def _handle_collecting_down_amount(
    text: str, context: CollectingDownAmount, catalog: Sequence[Property]
) -> TurnResult:
    ok, message, amount = _slot_value(context, text)
    if not ok:
        return _stay(context, message)

    prop = get_property(catalog, context.property_id)
    if 0 < amount < settings.MIN_DOWN_PAYMENT:
        raise ConstraintViolation(
            f"A down payment of {_money(amount)} looks too small. "
            f"Enter 0 or at least {_money(settings.MIN_DOWN_PAYMENT)}."
        )
    if amount > prop.cash_price:
        raise ConstraintViolation(
            f"The down payment cannot exceed the price of {_money(prop.cash_price)}."
        )
    new_context = _carry(context, CollectingDownYear, down_amount=amount)
    return _advance(context, new_context, _prompt(new_context))


def _handle_collecting_down_year(
    text: str, context: CollectingDownYear, catalog: Sequence[Property]
) -> TurnResult:
    ok, message, year = _slot_value(context, text, default=context.start_year)
    if not ok:
        return _stay(context, message)
    if year < context.start_year:
        raise ConstraintViolation(
            f"The down payment cannot be paid before {context.start_year}."
        )
    new_context = _carry(context, CollectingDownMonth, down_year=year)
    return _advance(context, new_context, _prompt(new_context))


def _handle_collecting_down_month(
    text: str, context: CollectingDownMonth, catalog: Sequence[Property]
) -> TurnResult:
    ok, message, month = _slot_value(context, text, default=context.start_month)
    if not ok:
        return _stay(context, message)
    if months_between(context.start_year, context.start_month, context.down_year, month) < 0:
        raise ConstraintViolation(
            "The down payment cannot be paid before "
            f"{format_year_month(context.start_year, context.start_month)}."
        )
    new_context = _carry(context, CollectingInstallmentCount, down_month=month)
    return _advance(context, new_context, _prompt(new_context))


def _handle_collecting_installment_count(
    text: str, context: CollectingInstallmentCount, catalog: Sequence[Property]
) -> TurnResult:
    ok, message, count = _slot_value(context, text, default=settings.DEFAULT_INSTALLMENTS)
    if not ok:
        return _stay(context, message)
    if count > settings.MAX_INSTALLMENTS:
        raise ConstraintViolation(
            f"At most {settings.MAX_INSTALLMENTS} installments are possible."
        )
    prop = get_property(catalog, context.property_id)
    return _complete(context, prop, _plan_inputs(context, count))


# ---------------------------------------------------------------------------
# Plan review and negotiation handlers
# ---------------------------------------------------------------------------


def _restart_for_property(
    context: PlanComputed, property_id: str, catalog: Sequence[Property]
) -> TurnResult:
    prop = find_property(catalog, property_id)
    if prop is None:
        return _stay(context, f"Property {property_id} was not found in the catalog.")
    new_context = _fresh_property(context, prop)
    return _advance(
        context,
        new_context,
        f"Starting a new plan.\n{_describe_property(prop)}\n{_prompt(new_context)}",
    )


def _handle_completed(
    text: str, context: Completed, catalog: Sequence[Property]
) -> TurnResult:
    ok, _, property_id = parse_property_id(text)
    if ok:
        return _restart_for_property(context, property_id, catalog)
    if wants_lower_installment(text):
        _, best = preferred_model(context.last_result)
        new_context = _carry(context, AwaitingLowerInstallment)
        return _advance(
            context,
            new_context,
            f"Your current installment is {_money(best.monthly_installment)}.\n"
            f"{_prompt(new_context)}",
        )
    return _stay(context)


def _handle_negotiation(
    text: str, context: Negotiating, catalog: Sequence[Property]
) -> TurnResult | None:
    """Replies shared by both negotiation steps; None when ``text`` is none of them."""
    if context.suggested_down_amount is not None:
        if is_affirmative(text):
            prop = get_property(catalog, context.property_id)
            plan = _plan_inputs(
                context, context.n_installments, down_amount=context.suggested_down_amount
            )
            return _complete(
                context,
                prop,
                plan,
                intro=f"Down payment raised to {_money(context.suggested_down_amount)}.",
            )
        if is_negative(text):
            kept = context.model_copy(update={"suggested_down_amount": None})
            return _stay(kept, "Keeping your current down payment.")

    if context.desired_installment is None:
        return None

    ok, _, term = parse_term_request(text)
    if ok:
        return _try_longer_term(context, term, catalog)
    if asks_down_payment_increase(text):
        return _offer_down_payment(context, catalog)
    return None


def _try_longer_term(
    context: Negotiating, term: int, catalog: Sequence[Property]
) -> TurnResult:
    if term <= context.n_installments:
        return _stay(
            context,
            f"{term} installments is not longer than your current {context.n_installments}.",
        )
    if term > settings.MAX_INSTALLMENTS:
        raise ConstraintViolation(
            f"At most {settings.MAX_INSTALLMENTS} installments are possible."
        )
    prop = get_property(catalog, context.property_id)
    installment = installment_for_price(_plan_inputs(context, term), prop.cash_price)
    if within_tolerance(installment, context.desired_installment, settings.ALTERNATIVE_TOLERANCE):
        return _complete(
            context,
            prop,
            _plan_inputs(context, term),
            intro=f"With {term} installments the payment fits your budget.",
        )
    return _stay(
        context,
        f"With {term} installments the payment would be {_money(installment)}, "
        f"still not close to {_money(context.desired_installment)}.",
    )


def _offer_down_payment(context: Negotiating, catalog: Sequence[Property]) -> TurnResult:
    prop = get_property(catalog, context.property_id)
    plan = _plan_inputs(context, context.n_installments)
    suggestion = search_down_payment(plan, prop.cash_price, context.desired_installment)
    if suggestion is None:
        return _stay(
            context.model_copy(update={"suggested_down_amount": None}),
            "No down payment up to "
            f"{_money(prop.cash_price * settings.DOWN_PAYMENT_CEILING_RATIO)} "
            "brings the installment close enough.",
        )
    offered = context.model_copy(update={"suggested_down_amount": suggestion.down_amount})
    return _stay(
        offered,
        f"With a down payment of {_money(suggestion.down_amount)} the installment would be "
        f"{_money(suggestion.monthly_installment)}.",
    )


def _handle_awaiting_lower_installment(
    text: str, context: AwaitingLowerInstallment, catalog: Sequence[Property]
) -> TurnResult:
    handled = _handle_negotiation(text, context, catalog)
    if handled is not None:
        return handled

    ok, _, property_id = parse_property_id(text)
    if ok:
        return _restart_for_property(context, property_id, catalog)

    ok, message, desired = _slot_value(context, text)
    if not ok:
        return _stay(context, message if text else "")
    if desired <= 0:
        return _stay(context, "The installment must be greater than zero.")
    return _propose_for_desired(context, desired, catalog)


def _propose_for_desired(
    context: AwaitingLowerInstallment, desired: float, catalog: Sequence[Property]
) -> TurnResult:
    prop = get_property(catalog, context.property_id)
    plan = _plan_inputs(context, context.n_installments)
    nominal = context.down_amount + desired * context.n_installments
    desired_pv = calculate_npv(
        plan.model_copy(update={"target_nominal": nominal})
    ).model_a.present_value
    intro = (
        f"{context.n_installments} x {_money(desired)} is worth {_money(desired_pv)} today, "
        f"against a cash price of {_money(prop.cash_price)}."
    )

    matches = find_alternatives(catalog, desired, plan, exclude_id=prop.id)
    if matches:
        new_context = _carry(
            context,
            ShowingAlternatives,
            desired_installment=desired,
            suggested_down_amount=None,
            alternatives=tuple(match.property.id for match in matches),
        )
        listing = [f"{intro}\nThese properties fit an installment of about {_money(desired)}:"]
        for position, match in enumerate(matches, start=1):
            delivery = match.property.delivery_duration or "unknown"
            listing.append(
                f"{position}. {_describe_property(match.property)}, "
                f"installment {_money(match.monthly_installment)}, delivery {delivery}"
            )
        listing.append(_prompt(new_context))
        return _advance(context, new_context, "\n".join(listing))

    lines = [intro, "No other property fits that installment."]
    longer = context.n_installments + settings.TERM_EXTENSION_MONTHS
    if longer <= settings.MAX_INSTALLMENTS:
        extended = installment_for_price(_plan_inputs(context, longer), prop.cash_price)
        line = f"With {longer} installments the payment would be {_money(extended)}"
        if within_tolerance(extended, desired, settings.ALTERNATIVE_TOLERANCE):
            line += f', which fits your budget. Ask "{longer} months?" to switch.'
        else:
            line += "."
        lines.append(line)

    suggestion = search_down_payment(plan, prop.cash_price, desired)
    if suggestion is not None:
        lines.append(
            f"Raising the down payment to {_money(suggestion.down_amount)} would bring the "
            f"installment to {_money(suggestion.monthly_installment)}."
        )
    new_context = context.model_copy(
        update={
            "desired_installment": desired,
            "suggested_down_amount": suggestion.down_amount if suggestion else None,
        }
    )
    lines.append(_prompt(new_context))
    return TurnResult(reply="\n".join(lines), context=new_context)


def _handle_showing_alternatives(
    text: str, context: ShowingAlternatives, catalog: Sequence[Property]
) -> TurnResult:
    handled = _handle_negotiation(text, context, catalog)
    if handled is not None:
        return handled

    ok, message, index = parse_list_ordinal(text, len(context.alternatives))
    if ok:
        prop = get_property(catalog, context.alternatives[index])
    else:
        id_ok, _, property_id = parse_property_id(text)
        if not id_ok:
            if text.rstrip(".").isdigit():
                return _stay(context, message)
            return _stay(context)
        prop = find_property(catalog, property_id)
        if prop is None:
            return _stay(context, f"Property {property_id} was not found in the catalog.")

    return _complete(
        context,
        prop,
        _plan_inputs(context, context.n_installments),
        intro=f"Switched to {prop.id}.",
    )


_HANDLERS: dict[ConversationStep, Callable[..., TurnResult]] = {
    ConversationStep.COLLECTING_PROPERTY: _handle_collecting_property,
    ConversationStep.COLLECTING_RATE: _handle_collecting_rate,
    ConversationStep.COLLECTING_DOWN_AMOUNT: _handle_collecting_down_amount,
    ConversationStep.COLLECTING_DOWN_YEAR: _handle_collecting_down_year,
    ConversationStep.COLLECTING_DOWN_MONTH: _handle_collecting_down_month,
    ConversationStep.COLLECTING_INSTALLMENT_COUNT: _handle_collecting_installment_count,
    ConversationStep.COMPLETED: _handle_completed,
    ConversationStep.AWAITING_LOWER_INSTALLMENT: _handle_awaiting_lower_installment,
    ConversationStep.SHOWING_ALTERNATIVES: _handle_showing_alternatives,
}
