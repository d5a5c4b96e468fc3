"""
Seller Financing Calculations

Seller-carried note payment, spread against market rent, return on the
down payment, and full operating accounting (NOI and net cash flow).
"""

from app.calculations.amortization import (
    calculate_payment,
    calculate_interest_only_payment,
    calculate_remaining_balance,
)
from app.calculations.schemas import (
    SellerFinancingCalculations,
    SellerFinancingExpenses,
    SellerFinancingInputs,
)


def calculate_note_payment(
    loan_amount: float, annual_rate: float, term_years: int, payment_type: str
) -> float:
    """Monthly payment on the seller note."""
    if payment_type == "Interest Only":
        return calculate_interest_only_payment(loan_amount, annual_rate)
    return calculate_payment(loan_amount, annual_rate, term_years)


def calculate_balloon_payment(inputs: SellerFinancingInputs, loan_amount: float) -> float:
    """Balance due when the note balloons, 0 for a fully amortizing note."""
    if inputs.balloon_years <= 0 or loan_amount <= 0:
        return 0.0
    if inputs.payment_type == "Interest Only":
        return loan_amount
    return calculate_remaining_balance(
        loan_amount,
        inputs.seller_loan_rate,
        inputs.loan_term,
        inputs.balloon_years * 12,
    )


def _monthly_fixed_expenses(expenses: SellerFinancingExpenses) -> float:
    return (
        expenses.monthly_taxes
        + expenses.monthly_insurance
        + expenses.monthly_hoa
        + expenses.monthly_water_sewer
        + expenses.monthly_street_lights
        + expenses.monthly_gas
        + expenses.monthly_electric
        + expenses.monthly_landscaping
        + expenses.monthly_misc_fees
    )


def calculate_seller_financing_metrics(
    inputs: SellerFinancingInputs,
) -> SellerFinancingCalculations:
    """
    Calculate seller-financed deal metrics.

    Args:
        inputs: Seller financing inputs (monthly amounts)

    Returns:
        Note payment, spread and return on down payment, plus operating
        income, NOI, net cash flow and cash-on-cash return
    """
    loan_amount = inputs.purchase_price - inputs.down_payment
    monthly_payment = calculate_note_payment(
        loan_amount, inputs.seller_loan_rate, inputs.loan_term, inputs.payment_type
    )

    spread_vs_market_rent = inputs.market_rent - monthly_payment
    return_on_down_payment = (
        spread_vs_market_rent * 12 / inputs.down_payment * 100
        if inputs.down_payment > 0
        else 0.0
    )

    # === OPERATIONS ===
    expenses = inputs.expenses
    gross_income = inputs.market_rent + inputs.other_monthly_income
    vacancy_loss = gross_income * (expenses.vacancy_rate / 100)
    effective_income = gross_income - vacancy_loss

    maintenance_cost = gross_income * (expenses.maintenance_rate / 100)
    management_cost = gross_income * (expenses.management_rate / 100)
    capex_cost = gross_income * (expenses.capex_rate / 100)
    operating_expenses = (
        _monthly_fixed_expenses(expenses)
        + maintenance_cost
        + management_cost
        + capex_cost
    )

    net_operating_income = effective_income - operating_expenses
    cash_flow = net_operating_income - monthly_payment

    total_cash_invested = inputs.down_payment + inputs.rehab_cost
    cash_on_cash_return = (
        cash_flow * 12 / total_cash_invested * 100 if total_cash_invested > 0 else 0.0
    )

    return SellerFinancingCalculations(
        loan_amount=loan_amount,
        monthly_payment=monthly_payment,
        spread_vs_market_rent=spread_vs_market_rent,
        return_on_down_payment=return_on_down_payment,
        balloon_payment=calculate_balloon_payment(inputs, loan_amount),
        gross_income=gross_income,
        vacancy_loss=vacancy_loss,
        effective_income=effective_income,
        operating_expenses=operating_expenses,
        net_operating_income=net_operating_income,
        cash_flow=cash_flow,
        cash_on_cash_return=cash_on_cash_return,
    )
