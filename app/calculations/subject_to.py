"""
Subject-To Calculations

Cash needed to take over an existing loan, the monthly spread against the
combined debt service (existing PITI, seller second note, private money),
and profit/ROI for a flip or hold exit.

Unlike rental metrics, vacancy and the variable costs here are percentages
of gross income (market rent plus other income).
"""

from app.calculations.amortization import (
    calculate_payment,
    calculate_interest_only_payment,
)
from app.calculations.schemas import SubjectToCalculations, SubjectToInputs


def calculate_entry_fee(inputs: SubjectToInputs) -> float:
    """Cash needed to close the takeover."""
    return (
        inputs.reinstatement_needed
        + inputs.seller_cash_needed
        + inputs.closing_costs
        + inputs.liens_judgments
        + inputs.hoa_fees
        + inputs.past_due_taxes
        + inputs.escrow_shortage
        + inputs.wholesale_fee
        + inputs.trust_setup_fees
    )


def calculate_seller_second_payment(inputs: SubjectToInputs) -> float:
    return calculate_payment(
        inputs.seller_second_note_amount,
        inputs.seller_second_note_rate,
        inputs.seller_second_note_term,
    )


def calculate_subject_to_metrics(inputs: SubjectToInputs) -> SubjectToCalculations:
    """
    Calculate subject-to deal metrics.

    Args:
        inputs: Subject-to deal inputs (monthly amounts)

    Returns:
        Entry cash, monthly operations, debt service, cash flow and exit
        profit/ROI
    """
    # === UPFRONT ===
    total_entry_fee = calculate_entry_fee(inputs)
    total_investment = total_entry_fee + inputs.rehab_cost

    # === INCOME ===
    gross_income = inputs.market_rent + inputs.other_monthly_income
    vacancy_loss = gross_income * (inputs.vacancy_rate / 100)
    effective_income = gross_income - vacancy_loss

    # === EXPENSES ===
    maintenance_cost = gross_income * (inputs.maintenance_rate / 100)
    management_cost = gross_income * (inputs.management_rate / 100)
    capex_cost = gross_income * (inputs.capex_rate / 100)
    total_expenses = (
        inputs.monthly_taxes
        + inputs.monthly_insurance
        + inputs.monthly_utilities
        + maintenance_cost
        + management_cost
        + capex_cost
    )

    net_operating_income = effective_income - total_expenses

    # === DEBT SERVICE ===
    existing_loan_payment = inputs.monthly_piti
    seller_second_payment = calculate_seller_second_payment(inputs)
    private_money_payment = calculate_interest_only_payment(
        inputs.private_money_amount, inputs.private_money_rate
    )
    total_debt_service = (
        existing_loan_payment + seller_second_payment + private_money_payment
    )

    # === CASH FLOW ===
    monthly_spread = inputs.market_rent - inputs.monthly_piti
    monthly_cash_flow = net_operating_income - total_debt_service
    cash_on_cash_return = (
        (monthly_cash_flow * 12) / total_investment * 100
        if total_investment > 0
        else 0.0
    )

    # === EXIT ===
    total_payoff = (
        inputs.existing_loan_balance
        + inputs.seller_second_note_amount
        + inputs.private_money_amount
    )

    if inputs.exit_plan_type == "Flip":
        selling_costs_percent = inputs.resale_costs_percent + inputs.agent_fees_percent
        sale_proceeds = inputs.sale_price * (1 - selling_costs_percent / 100)
        projected_profit = sale_proceeds - total_payoff - total_investment
        roi = (
            projected_profit / total_investment * 100 if total_investment > 0 else 0.0
        )
    else:
        # Hold (rental, wrap, wholesale): the annual cash flow is the profit
        projected_profit = monthly_cash_flow * 12
        roi = cash_on_cash_return

    return SubjectToCalculations(
        total_entry_fee=total_entry_fee,
        total_investment=total_investment,
        gross_income=gross_income,
        vacancy_loss=vacancy_loss,
        effective_income=effective_income,
        total_expenses=total_expenses,
        net_operating_income=net_operating_income,
        existing_loan_payment=existing_loan_payment,
        seller_second_payment=seller_second_payment,
        private_money_payment=private_money_payment,
        total_debt_service=total_debt_service,
        monthly_spread=monthly_spread,
        monthly_cash_flow=monthly_cash_flow,
        cash_on_cash_return=cash_on_cash_return,
        total_payoff=total_payoff,
        projected_profit=projected_profit,
        roi=roi,
    )
