"""
Print a BRRRR run where the refinance pulls out more than the project cost.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.calculations.brrrr import calculate_brrrr_metrics
from app.calculations.schemas import BrrrrInputs


def main():
    inputs = BrrrrInputs(
        purchase_price=80000,
        arv=150000,
        purchase_costs={"title_escrow_fees": 1500, "inspection_cost": 400},
        rehab_costs={
            "exterior": {"roof": 8000, "painting": 2500},
            "interior": {"flooring": 4000, "cabinets": 3000},
            "general": {"permits": 600},
        },
        financing={
            "loan_amount": 70000,
            "interest_rate": 11,
            "points": 2,
            "rehab_timeline_months": 4,
        },
        refinance={"loan_ltv": 75, "interest_rate": 7.25, "closing_costs": 3500},
        expenses={
            "monthly_taxes": 120,
            "monthly_insurance": 90,
            "vacancy_rate": 8,
            "maintenance_rate": 8,
            "capex_rate": 5,
            "management_rate": 10,
        },
        monthly_rent=1450,
        holding_costs_monthly=350,
    )

    results = calculate_brrrr_metrics(inputs)

    print(f"Total project cost:     {results.total_project_cost:,.2f}")
    print(f"Refinance loan amount:  {results.refinance_loan_amount:,.2f}")
    print(f"Net refi proceeds:      {results.net_refi_proceeds:,.2f}")
    print(f"Cash left in deal:      {results.cash_left_in_deal:,.2f}")
    print(f"Post-refi cash flow/mo: {results.monthly_cash_flow_post_refi:,.2f}")
    if results.is_infinite_return:
        print("ROI:                    infinite (all capital recovered)")
    else:
        print(f"ROI:                    {results.roi:.2f}%")


if __name__ == "__main__":
    main()
