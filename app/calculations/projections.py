"""
Long-Term Projections

Generates a 30-year forward projection of property value, loan balance,
income, expenses and cumulative returns for a rental.
"""

import math
from typing import List

from app.calculations.amortization import calculate_payment, calculate_remaining_balance
from app.calculations.rental import calculate_operating_statement
from app.calculations.schemas import (
    Financials,
    ProjectionAssumptions,
    ProjectionSummary,
    ProjectionYear,
)

PROJECTION_YEARS = 30


def _grow(amount: float, annual_rate: float) -> float:
    return amount * (1 + annual_rate / 100)


def round_currency(amount: float) -> int:
    """Round to whole currency units, halves rounding up."""
    return math.floor(amount + 0.5)


def calculate_projections(
    financials: Financials, assumptions: ProjectionAssumptions
) -> List[ProjectionYear]:
    """
    Project the deal forward year by year.

    Property value appreciates every year, including year 1. Income and
    operating expenses start from the rental's year-1 operating statement and
    grow from year 2 onward. Debt service is fixed from the original loan
    terms for the whole horizon.

    All monetary values are rounded to whole currency units only when the
    row is emitted.

    Args:
        financials: Rental inputs
        assumptions: Appreciation, income growth and expense growth rates

    Returns:
        One row per year, year 1 through 30
    """
    projections = []

    initial_value = financials.purchase_price or financials.list_price
    initial_loan = financials.purchase_price * (
        1 - financials.down_payment_percent / 100
    )
    rate = financials.loan_interest_rate
    term_years = financials.loan_term_years

    annual_debt_service = calculate_payment(initial_loan, rate, term_years) * 12

    # Vacancy is carried as an operating expense so year-1 NOI matches
    # the rental metrics
    statement = calculate_operating_statement(financials)
    annual_income = statement.gross_annual_rent + statement.other_annual_income
    annual_expenses = statement.vacancy_loss + statement.total_operating_expenses

    property_value = initial_value
    cumulative_cash_flow = 0.0

    for year in range(1, PROJECTION_YEARS + 1):
        property_value = _grow(property_value, assumptions.appreciation_rate)

        if year > 1:
            annual_income = _grow(annual_income, assumptions.income_growth_rate)
            annual_expenses = _grow(annual_expenses, assumptions.expense_growth_rate)

        loan_balance = calculate_remaining_balance(
            initial_loan, rate, term_years, year * 12
        )

        noi = annual_income - annual_expenses
        cash_flow = noi - annual_debt_service
        cumulative_cash_flow += cash_flow

        cumulative_appreciation = property_value - initial_value
        cumulative_principal_paydown = initial_loan - loan_balance
        total_return = (
            cumulative_cash_flow + cumulative_principal_paydown + cumulative_appreciation
        )

        rounded_value = round_currency(property_value)
        rounded_balance = round_currency(loan_balance)

        projections.append(
            ProjectionYear(
                year=year,
                property_value=rounded_value,
                loan_balance=rounded_balance,
                equity=rounded_value - rounded_balance,
                gross_income=round_currency(annual_income),
                operating_expenses=round_currency(annual_expenses),
                net_operating_income=round_currency(noi),
                debt_service=round_currency(annual_debt_service),
                cash_flow=round_currency(cash_flow),
                cumulative_cash_flow=round_currency(cumulative_cash_flow),
                cumulative_appreciation=round_currency(cumulative_appreciation),
                cumulative_principal_paydown=round_currency(
                    cumulative_principal_paydown
                ),
                total_return=round_currency(total_return),
            )
        )

    return projections


def summarize_projections(projections: List[ProjectionYear]) -> ProjectionSummary:
    """Headline figures at the end of the projection horizon."""
    final_year = projections[-1]
    return ProjectionSummary(
        years=final_year.year,
        total_return=final_year.total_return,
        equity=final_year.equity,
        cumulative_cash_flow=final_year.cumulative_cash_flow,
    )
