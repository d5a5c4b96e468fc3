"""
Rental Metrics Calculations

Standard buy-and-hold deal metrics: cash to close, NOI, cap rates,
cash-on-cash return, DSCR and monthly cash flow.

Vacancy and the variable operating costs (maintenance, management, capex)
are percentages of gross annual rent, not of effective income. Other
income is added to effective gross income but is not part of that base.
"""

from app.calculations.amortization import (
    calculate_dscr,
    calculate_loan_constant,
    calculate_payment,
)
from app.calculations.schemas import CalculatedMetrics, Financials, OperatingStatement


def total_closing_fees(financials: Financials) -> float:
    """Sum of the fixed (non-percentage) closing fees."""
    return (
        financials.closing_fee
        + financials.processing_fee
        + financials.appraisal_fee
        + financials.title_fee
        + financials.broker_agent_fee
        + financials.home_warranty_fee
        + financials.attorney_fee
        + financials.closing_misc_fee
    )


def total_seller_credits(financials: Financials) -> float:
    return (
        financials.seller_credit_tax
        + financials.seller_credit_sewer
        + financials.seller_credit_origination
        + financials.seller_credit_closing
        + financials.seller_credit_rents
        + financials.seller_credit_security_deposit
        + financials.seller_credit_misc
    )


def monthly_fixed_costs(financials: Financials) -> float:
    """Taxes, insurance, utilities, HOA and misc, per month."""
    utilities = (
        financials.monthly_water_sewer
        + financials.monthly_street_lights
        + financials.monthly_gas
        + financials.monthly_electric
        + financials.monthly_landscaping
    )
    return (
        financials.monthly_taxes
        + financials.monthly_insurance
        + utilities
        + financials.monthly_hoa_fee
        + financials.operating_misc_fee
    )


def calculate_operating_statement(financials: Financials) -> OperatingStatement:
    """
    Build the annual income and operating expense statement.

    Args:
        financials: Rental inputs

    Returns:
        Annual gross rent, vacancy, effective gross income, each operating
        expense line and NOI
    """
    gross_annual_rent = sum(financials.monthly_rents) * 12
    other_annual_income = financials.other_monthly_income * 12

    vacancy_loss = gross_annual_rent * (financials.vacancy_rate / 100)
    effective_gross_income = gross_annual_rent - vacancy_loss + other_annual_income

    maintenance_cost = gross_annual_rent * (financials.maintenance_rate / 100)
    management_cost = gross_annual_rent * (financials.management_rate / 100)
    capex_cost = gross_annual_rent * (financials.capex_rate / 100)
    fixed_operating_costs = monthly_fixed_costs(financials) * 12

    total_operating_expenses = (
        maintenance_cost + management_cost + capex_cost + fixed_operating_costs
    )
    net_operating_income = effective_gross_income - total_operating_expenses

    return OperatingStatement(
        gross_annual_rent=gross_annual_rent,
        other_annual_income=other_annual_income,
        vacancy_loss=vacancy_loss,
        effective_gross_income=effective_gross_income,
        maintenance_cost=maintenance_cost,
        management_cost=management_cost,
        capex_cost=capex_cost,
        fixed_operating_costs=fixed_operating_costs,
        total_operating_expenses=total_operating_expenses,
        net_operating_income=net_operating_income,
    )


def calculate_rental_metrics(financials: Financials) -> CalculatedMetrics:
    """
    Calculate buy-and-hold rental metrics.

    Ratios with a zero (or negative) denominator are reported as 0, and DSCR
    as None when there is no debt service. A negative cash to close is a
    valid result when seller credits exceed the cash brought in.

    Args:
        financials: Rental inputs

    Returns:
        Calculated metrics; annual amounts unless prefixed ``monthly_``
    """
    purchase_price = financials.purchase_price

    # === ACQUISITION ===
    down_payment_amount = purchase_price * (financials.down_payment_percent / 100)
    loan_amount = purchase_price - down_payment_amount

    origination_fee_amount = loan_amount * (financials.origination_fee_percent / 100)
    total_closing_costs = origination_fee_amount + total_closing_fees(financials)

    seller_credits = total_seller_credits(financials)
    total_cash_to_close = (
        down_payment_amount
        + financials.rehab_cost
        + total_closing_costs
        - seller_credits
    )
    total_investment = purchase_price + financials.rehab_cost

    # === DEBT SERVICE ===
    monthly_debt_service = calculate_payment(
        loan_amount, financials.loan_interest_rate, financials.loan_term_years
    )
    annual_debt_service = monthly_debt_service * 12

    # === OPERATIONS ===
    statement = calculate_operating_statement(financials)
    noi = statement.net_operating_income

    monthly_cash_flow_no_debt = noi / 12
    monthly_cash_flow_with_debt = monthly_cash_flow_no_debt - monthly_debt_service

    # === RATIOS ===
    cap_rate = (noi / purchase_price) * 100 if purchase_price > 0 else 0.0
    all_in_cap_rate = (noi / total_investment) * 100 if total_investment > 0 else 0.0
    cash_on_cash_return = (
        (monthly_cash_flow_with_debt * 12) / total_cash_to_close * 100
        if total_cash_to_close > 0
        else 0.0
    )

    return CalculatedMetrics(
        down_payment_amount=down_payment_amount,
        loan_amount=loan_amount,
        origination_fee_amount=origination_fee_amount,
        total_closing_costs=total_closing_costs,
        total_seller_credits=seller_credits,
        total_cash_to_close=total_cash_to_close,
        total_investment=total_investment,
        monthly_debt_service=monthly_debt_service,
        annual_debt_service=annual_debt_service,
        loan_constant=calculate_loan_constant(
            loan_amount, financials.loan_interest_rate, financials.loan_term_years
        ),
        gross_annual_rent=statement.gross_annual_rent,
        other_annual_income=statement.other_annual_income,
        vacancy_loss=statement.vacancy_loss,
        effective_gross_income=statement.effective_gross_income,
        maintenance_cost=statement.maintenance_cost,
        management_cost=statement.management_cost,
        capex_cost=statement.capex_cost,
        fixed_operating_costs=statement.fixed_operating_costs,
        total_operating_expenses=statement.total_operating_expenses,
        net_operating_income=noi,
        cap_rate=cap_rate,
        all_in_cap_rate=all_in_cap_rate,
        cash_on_cash_return=cash_on_cash_return,
        dscr=calculate_dscr(noi, annual_debt_service),
        monthly_cash_flow_no_debt=monthly_cash_flow_no_debt,
        monthly_cash_flow_with_debt=monthly_cash_flow_with_debt,
    )
