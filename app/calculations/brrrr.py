"""
BRRRR Calculations

Buy, Rehab, Rent, Refinance, Repeat. A single straight-line computation in
phases:

1. Acquisition closing costs
2. Rehab (exterior, interior, general)
3. Holding costs over the rehab timeline
4. Initial financing carry, points and lender charges
5. Total project cost
6. Refinance at ARV x LTV
7. Cash left in the deal
8. Post-refinance operations
9. Return on the cash left in the deal

Costs are added to the project cost; net refinance proceeds are credited
against it. When the refinance recovers everything, the return is flagged
as infinite instead of being divided out.
"""

from pydantic import BaseModel

from app.calculations.amortization import (
    calculate_payment,
    calculate_interest_only_payment,
)
from app.calculations.schemas import (
    BrrrrCalculations,
    BrrrrExpenseBreakdown,
    BrrrrFinancing,
    BrrrrInputs,
    BrrrrOperatingExpenses,
    BrrrrRevenueBreakdown,
)

# Refinance loans are underwritten as 30-year fixed
REFINANCE_TERM_YEARS = 30


def sum_line_items(group: BaseModel) -> float:
    """Sum every numeric line item of a cost group."""
    return float(sum(group.model_dump().values()))


def calculate_financing_costs(financing: BrrrrFinancing, months: int) -> dict:
    """
    Carry cost of the acquisition/rehab loan.

    Interest during rehab is carried as interest-only whether or not the loan
    amortizes. All-cash deals have no financing costs.
    """
    if financing.is_cash:
        return {"interest": 0.0, "points": 0.0, "other_charges": 0.0, "total": 0.0}

    monthly_interest = calculate_interest_only_payment(
        financing.loan_amount, financing.interest_rate
    )
    interest = monthly_interest * months
    points = financing.loan_amount * (financing.points / 100)
    other_charges = financing.other_charges

    return {
        "interest": interest,
        "points": points,
        "other_charges": other_charges,
        "total": interest + points + other_charges,
    }


def _monthly_utilities(expenses: BrrrrOperatingExpenses) -> float:
    return (
        expenses.monthly_water_sewer
        + expenses.monthly_street_lights
        + expenses.monthly_gas
        + expenses.monthly_electric
        + expenses.monthly_landscaping
    )


def calculate_brrrr_metrics(inputs: BrrrrInputs) -> BrrrrCalculations:
    """
    Calculate BRRRR project cost, refinance and post-refinance returns.

    Args:
        inputs: BRRRR deal inputs

    Returns:
        Phase totals, refinance results, post-refi monthly cash flow and ROI
    """
    # === 1. ACQUISITION ===
    total_purchase_closing_costs = sum_line_items(inputs.purchase_costs)

    # === 2. REHAB ===
    total_exterior_rehab = sum_line_items(inputs.rehab_costs.exterior)
    total_interior_rehab = sum_line_items(inputs.rehab_costs.interior)
    total_general_rehab = sum_line_items(inputs.rehab_costs.general)
    total_rehab_cost = total_exterior_rehab + total_interior_rehab + total_general_rehab

    # === 3. HOLDING ===
    rehab_months = inputs.financing.rehab_timeline_months
    total_holding_costs = inputs.holding_costs_monthly * rehab_months

    # === 4. INITIAL FINANCING ===
    financing_costs = calculate_financing_costs(inputs.financing, rehab_months)
    total_financing_costs = financing_costs["total"]

    # === 5. PROJECT COST ===
    total_project_cost = (
        inputs.purchase_price
        + total_rehab_cost
        + total_purchase_closing_costs
        + total_holding_costs
        + total_financing_costs
    )

    # === 6. REFINANCE ===
    refinance = inputs.refinance
    refinance_loan_amount = inputs.arv * (refinance.loan_ltv / 100)
    refi_closing_costs = refinance.closing_costs
    net_refi_proceeds = refinance_loan_amount - refi_closing_costs

    # === 7. CASH LEFT IN DEAL ===
    cash_left_in_deal = total_project_cost - net_refi_proceeds

    # === 8. POST-REFI OPERATIONS ===
    expenses = inputs.expenses
    refinance_monthly_payment = calculate_payment(
        refinance_loan_amount, refinance.interest_rate, REFINANCE_TERM_YEARS
    )

    gross_monthly_income = inputs.monthly_rent + expenses.other_monthly_income
    vacancy_loss = gross_monthly_income * (expenses.vacancy_rate / 100)
    effective_income = gross_monthly_income - vacancy_loss

    maintenance_cost = gross_monthly_income * (expenses.maintenance_rate / 100)
    capex_cost = gross_monthly_income * (expenses.capex_rate / 100)
    management_cost = gross_monthly_income * (expenses.management_rate / 100)

    utilities = _monthly_utilities(expenses)
    total_fixed_expenses = (
        expenses.monthly_taxes
        + expenses.monthly_insurance
        + expenses.monthly_hoa
        + utilities
        + expenses.monthly_misc_fees
    )
    total_operating_expenses = (
        total_fixed_expenses + maintenance_cost + capex_cost + management_cost
    )

    monthly_cash_flow_post_refi = (
        effective_income - total_operating_expenses - refinance_monthly_payment
    )
    annual_cash_flow = monthly_cash_flow_post_refi * 12

    # === 9. ROI ===
    if cash_left_in_deal <= 0:
        roi = None
        is_infinite_return = True
    else:
        roi = annual_cash_flow / cash_left_in_deal * 100
        is_infinite_return = False

    return BrrrrCalculations(
        total_purchase_closing_costs=total_purchase_closing_costs,
        total_exterior_rehab=total_exterior_rehab,
        total_interior_rehab=total_interior_rehab,
        total_general_rehab=total_general_rehab,
        total_rehab_cost=total_rehab_cost,
        total_holding_costs=total_holding_costs,
        initial_loan_interest=financing_costs["interest"],
        initial_loan_points=financing_costs["points"],
        total_financing_costs=total_financing_costs,
        total_project_cost=total_project_cost,
        refinance_loan_amount=refinance_loan_amount,
        refi_closing_costs=refi_closing_costs,
        net_refi_proceeds=net_refi_proceeds,
        refinance_monthly_payment=refinance_monthly_payment,
        cash_left_in_deal=cash_left_in_deal,
        cash_out_amount=-cash_left_in_deal,
        monthly_revenue=effective_income,
        monthly_expenses=total_operating_expenses + refinance_monthly_payment,
        monthly_cash_flow_post_refi=monthly_cash_flow_post_refi,
        annual_cash_flow=annual_cash_flow,
        roi=roi,
        is_infinite_return=is_infinite_return,
        revenue=BrrrrRevenueBreakdown(
            gross_rent=inputs.monthly_rent,
            other_income=expenses.other_monthly_income,
            vacancy_loss=vacancy_loss,
            effective_income=effective_income,
        ),
        expenses=BrrrrExpenseBreakdown(
            property_taxes=expenses.monthly_taxes,
            insurance=expenses.monthly_insurance,
            hoa=expenses.monthly_hoa,
            utilities=utilities,
            repairs_maintenance=maintenance_cost,
            capex=capex_cost,
            management=management_cost,
            misc=expenses.monthly_misc_fees,
            debt_service=refinance_monthly_payment,
            total_operating_expenses=total_operating_expenses,
            total_expenses=total_operating_expenses + refinance_monthly_payment,
        ),
    )
