"""
Wholesale Calculations

Maximum Allowable Offer (MAO) and assignment-fee eligibility.
"""

from app.calculations.schemas import WholesaleCalculations, WholesaleInputs


def calculate_mao(
    arv: float,
    mao_percent_of_arv: float,
    estimated_rehab: float,
    closing_cost: float,
    wholesale_fee_goal: float,
) -> float:
    """MAO = ARV x MAO% - rehab - closing - target fee."""
    return (
        arv * (mao_percent_of_arv / 100)
        - estimated_rehab
        - closing_cost
        - wholesale_fee_goal
    )


def calculate_wholesale_metrics(inputs: WholesaleInputs) -> WholesaleCalculations:
    """
    Calculate MAO and the fee left over against the seller's ask.

    A deal is eligible only when the potential fee is strictly positive;
    a zero spread is not a deal.
    """
    mao = calculate_mao(
        inputs.arv,
        inputs.mao_percent_of_arv,
        inputs.estimated_rehab,
        inputs.closing_cost,
        inputs.wholesale_fee_goal,
    )
    potential_fees = mao - inputs.seller_ask

    return WholesaleCalculations(
        mao=mao,
        potential_fees=potential_fees,
        is_eligible=potential_fees > 0,
        is_assignable=inputs.is_assignable,
    )
