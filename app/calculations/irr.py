"""
IRR and Hold-Period Return Calculations

Implements IRR using Newton-Raphson, and a simplified hold-then-sell
return estimate for a rental: cash flow grows each year and the property
is sold at the end of the hold.
"""

from typing import List

from app.calculations.schemas import HoldPeriodReturns

MAX_ITERATIONS = 100
TOLERANCE = 1e-7
DEFAULT_GUESS = 0.1


def calculate_npv(cash_flows: List[float], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of cash flows.

    Args:
        cash_flows: Array of cash flows (negative = outflow, positive = inflow)
        discount_rate: Periodic discount rate as decimal (e.g., 0.10 for 10%)

    Returns:
        NPV value
    """
    npv = 0.0
    for period, cf in enumerate(cash_flows):
        npv += cf / ((1 + discount_rate) ** period)
    return npv


def _npv_derivative(cash_flows: List[float], rate: float) -> float:
    """Calculate derivative of NPV with respect to rate (for Newton-Raphson)."""
    dnpv = 0.0
    for period, cf in enumerate(cash_flows):
        dnpv -= (period * cf) / ((1 + rate) ** (period + 1))
    return dnpv


def calculate_irr(cash_flows: List[float], guess: float = DEFAULT_GUESS) -> float:
    """
    Calculate IRR (Internal Rate of Return) using Newton-Raphson method.

    Args:
        cash_flows: Array of periodic cash flows
        guess: Initial guess for rate (default 0.1 = 10%)

    Returns:
        Periodic IRR as decimal (e.g., 0.15 for 15%)

    Raises:
        ValueError: If IRR cannot be calculated
    """
    if len(cash_flows) < 2:
        raise ValueError("At least 2 cash flows required")

    has_positive = any(cf > 0 for cf in cash_flows)
    has_negative = any(cf < 0 for cf in cash_flows)

    if not has_positive or not has_negative:
        raise ValueError("Cash flows must contain both positive and negative values")

    rate = guess

    for _ in range(MAX_ITERATIONS):
        npv = calculate_npv(cash_flows, rate)
        dnpv = _npv_derivative(cash_flows, rate)

        if abs(dnpv) < TOLERANCE:
            raise ValueError("IRR calculation failed: derivative too small")

        new_rate = rate - npv / dnpv

        if abs(new_rate - rate) < TOLERANCE:
            return new_rate

        rate = new_rate

    raise ValueError("IRR calculation did not converge")


def calculate_multiple(cash_flows: List[float]) -> float:
    """
    Calculate equity multiple.

    Args:
        cash_flows: Array of cash flows (investments are negative)

    Returns:
        Multiple (e.g., 2.0 = 2.0x return)
    """
    total_inflows = sum(cf for cf in cash_flows if cf > 0)
    total_outflows = abs(sum(cf for cf in cash_flows if cf < 0))

    if total_outflows == 0:
        raise ValueError("No investment (outflows) found")

    return total_inflows / total_outflows


def calculate_profit(cash_flows: List[float]) -> float:
    """Calculate profit (total inflows minus total outflows)."""
    return sum(cash_flows)


def build_hold_period_cash_flows(
    initial_investment: float,
    year1_cash_flow: float,
    initial_property_value: float,
    selling_costs_percent: float = 6.0,
    annual_growth_rate: float = 3.0,
    hold_years: int = 5,
) -> List[float]:
    """
    Build annual cash flows for a hold-then-sell scenario.

    Year 0 is the investment. Cash flow grows by the growth rate each year.
    The final year adds the net sale proceeds: the investment returned plus
    appreciation, less selling costs on the sale price. Principal paydown is
    ignored.

    Raises:
        ValueError: If the hold period is shorter than one year
    """
    if hold_years < 1:
        raise ValueError("Hold period must be at least one year")

    growth = annual_growth_rate / 100
    cash_flows = [-initial_investment]

    current_cash_flow = year1_cash_flow
    for _ in range(hold_years):
        cash_flows.append(current_cash_flow)
        current_cash_flow *= 1 + growth

    sale_price = initial_property_value * (1 + growth) ** hold_years
    net_sale_proceeds = (
        initial_investment
        + (sale_price - initial_property_value)
        - sale_price * (selling_costs_percent / 100)
    )
    cash_flows[-1] += net_sale_proceeds

    return cash_flows


def estimate_hold_period_irr(
    initial_investment: float,
    year1_cash_flow: float,
    initial_property_value: float,
    selling_costs_percent: float = 6.0,
    annual_growth_rate: float = 3.0,
    hold_years: int = 5,
) -> HoldPeriodReturns:
    """
    Estimate IRR, profit and equity multiple over a short hold.

    With no cash invested the return is infinite: IRR and multiple are
    reported as None with ``is_infinite_return`` set.

    Raises:
        ValueError: If the IRR does not converge
    """
    if initial_investment <= 0:
        return HoldPeriodReturns(total_profit=0.0, is_infinite_return=True)

    cash_flows = build_hold_period_cash_flows(
        initial_investment,
        year1_cash_flow,
        initial_property_value,
        selling_costs_percent=selling_costs_percent,
        annual_growth_rate=annual_growth_rate,
        hold_years=hold_years,
    )
    total_profit = calculate_profit(cash_flows)

    return HoldPeriodReturns(
        irr=calculate_irr(cash_flows) * 100,
        total_profit=total_profit,
        equity_multiple=calculate_multiple(cash_flows),
        cash_flows=cash_flows,
    )
