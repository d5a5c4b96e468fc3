"""
Verify cash to close for a single-unit rental with seller credits.
$100k purchase, 20% down, no closing costs, $1,700 in credits.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.calculations.rental import calculate_rental_metrics
from app.calculations.schemas import Financials


def main():
    financials = Financials(
        list_price=100000,
        purchase_price=100000,
        down_payment_percent=20,
        monthly_rents=[1000],
        vacancy_rate=5,
        maintenance_rate=5,
        management_rate=10,
        capex_rate=5,
        monthly_taxes=100,
        monthly_insurance=50,
        loan_interest_rate=5,
        loan_term_years=30,
        seller_credit_rents=1000,
        seller_credit_security_deposit=500,
        seller_credit_misc=200,
    )

    metrics = calculate_rental_metrics(financials)
    expected = 20000 - (1000 + 500 + 200)

    print(f"Total cash to close: {metrics.total_cash_to_close:,.2f}")
    print(f"Expected:            {expected:,.2f}")

    if metrics.total_cash_to_close == expected:
        print("Verification PASSED")
        return 0

    print("Verification FAILED")
    return 1


if __name__ == "__main__":
    sys.exit(main())
