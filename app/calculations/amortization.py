"""
Loan Amortization Calculations

Fixed-rate loan payment, remaining balance and schedule calculations shared
by every loan-bearing strategy calculator. Rates are annual percentages
(e.g., 5 for 5%) and terms are in years, matching the deal input records.
"""

from typing import List, Dict, Optional
from datetime import date
from dateutil.relativedelta import relativedelta


def _monthly_rate(annual_rate: float) -> float:
    return annual_rate / 100 / 12


def calculate_payment(
    principal: float, annual_rate: float, term_years: float
) -> float:
    """
    Calculate the constant monthly payment of a fixed-rate loan.

    P = L * i * (1 + i)^n / ((1 + i)^n - 1)

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as a percentage (e.g., 5 for 5%)
        term_years: Amortization term in years

    Returns:
        Monthly payment amount, 0 for zero-principal, zero-rate or
        zero-term loans
    """
    if principal <= 0:
        return 0.0
    if annual_rate <= 0:
        return 0.0

    num_payments = int(round(term_years * 12))
    if num_payments <= 0:
        return 0.0

    monthly_rate = _monthly_rate(annual_rate)
    growth = (1 + monthly_rate) ** num_payments

    return principal * monthly_rate * growth / (growth - 1)


def calculate_straight_line_payment(principal: float, term_years: float) -> float:
    """Monthly principal of an interest-free loan repaid in equal installments."""
    num_payments = int(round(term_years * 12))
    if principal <= 0 or num_payments <= 0:
        return 0.0
    return principal / num_payments


def calculate_interest_only_payment(principal: float, annual_rate: float) -> float:
    """Monthly payment of an interest-only note."""
    if principal <= 0 or annual_rate <= 0:
        return 0.0
    return principal * (annual_rate / 100) / 12


def calculate_remaining_balance(
    principal: float,
    annual_rate: float,
    term_years: float,
    payments_made: int,
) -> float:
    """
    Calculate remaining loan balance after N payments.

    Uses the closed-form balance B_k = L(1+i)^k - P((1+i)^k - 1)/i.
    The balance is exactly 0 at and after maturity and never negative.
    """
    if principal <= 0:
        return 0.0
    if payments_made <= 0:
        return float(principal)

    num_payments = int(round(term_years * 12))
    payment = calculate_payment(principal, annual_rate, term_years)

    # Zero-rate or zero-term loans carry no scheduled payment
    if payment == 0:
        return float(principal)

    if payments_made >= num_payments:
        return 0.0

    monthly_rate = _monthly_rate(annual_rate)
    growth = (1 + monthly_rate) ** payments_made
    balance = principal * growth - payment * ((growth - 1) / monthly_rate)

    return max(0.0, balance)


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    term_years: float,
    io_months: int = 0,
    total_months: Optional[int] = None,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a full amortization schedule.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as a percentage
        term_years: Amortization term in years
        io_months: Interest-only period in months, before amortization starts
        total_months: Number of periods to emit (default: io + amortization)
        start_date: Date of first payment

    Returns:
        List of amortization rows
    """
    schedule = []
    balance = float(principal)
    monthly_rate = _monthly_rate(annual_rate)
    amortization_months = int(round(term_years * 12))

    if total_months is None:
        total_months = io_months + amortization_months

    if start_date is None:
        start_date = date.today()

    for period in range(1, total_months + 1):
        period_date = start_date + relativedelta(months=period - 1)

        interest = balance * monthly_rate

        if period <= io_months:
            principal_pmt = 0.0
            payment = interest
        else:
            remaining_amort_periods = amortization_months - (period - io_months - 1)
            if remaining_amort_periods > 0 and annual_rate <= 0:
                # Interest-free: repay the balance in equal installments
                principal_pmt = balance / remaining_amort_periods
                payment = principal_pmt
            elif remaining_amort_periods > 0:
                payment = calculate_payment(
                    balance, annual_rate, remaining_amort_periods / 12
                )
                principal_pmt = max(0.0, min(payment - interest, balance))
                payment = principal_pmt + interest
            else:
                # Pay off remaining balance
                principal_pmt = balance
                payment = balance + interest

        ending_balance = balance - principal_pmt

        schedule.append(
            {
                "period": period,
                "date": period_date.isoformat(),
                "beginning_balance": round(balance, 2),
                "payment": round(payment, 2),
                "interest": round(interest, 2),
                "principal": round(principal_pmt, 2),
                "ending_balance": round(max(0, ending_balance), 2),
            }
        )

        balance = max(0.0, ending_balance)

        if balance == 0:
            break

    return schedule


def calculate_total_interest(schedule: List[Dict]) -> float:
    """Calculate total interest paid over loan term."""
    return sum(row["interest"] for row in schedule)


def calculate_dscr(noi: float, debt_service: float) -> Optional[float]:
    """
    Calculate Debt Service Coverage Ratio (DSCR).

    Args:
        noi: Net Operating Income for the period
        debt_service: Debt service for the same period

    Returns:
        DSCR ratio, or None when there is no debt service to cover
    """
    if debt_service == 0:
        return None
    return noi / debt_service


def calculate_loan_constant(
    principal: float, annual_rate: float, term_years: float
) -> float:
    """Calculate loan constant (annual debt service / loan amount)."""
    monthly_payment = calculate_payment(principal, annual_rate, term_years)
    annual_debt_service = monthly_payment * 12
    return annual_debt_service / principal if principal > 0 else 0.0
