"""
Tests for the loan, IRR, rental and wholesale calculations.
"""

import pytest
from pydantic import ValidationError

from app.calculations.amortization import (
    calculate_payment,
    calculate_remaining_balance,
    calculate_interest_only_payment,
    calculate_dscr,
    calculate_loan_constant,
    generate_amortization_schedule,
    calculate_total_interest,
    calculate_straight_line_payment,
)
from app.calculations.irr import (
    calculate_irr,
    calculate_npv,
    calculate_multiple,
    calculate_profit,
    build_hold_period_cash_flows,
    estimate_hold_period_irr,
)
from app.calculations.rental import calculate_rental_metrics, calculate_operating_statement
from app.calculations.schemas import Financials, WholesaleInputs
from app.calculations.wholesale import calculate_mao, calculate_wholesale_metrics


class TestAmortization:
    """Test loan amortization calculations."""

    def test_calculate_payment(self):
        """Test monthly payment calculation."""
        # $1M loan at 5% for 30 years
        payment = calculate_payment(1000000, 5, 30)
        assert payment == pytest.approx(5368.22, abs=0.01)

    def test_payment_zero_principal_or_rate(self):
        assert calculate_payment(0, 5, 30) == 0
        assert calculate_payment(-100, 5, 30) == 0
        assert calculate_payment(100000, 0, 30) == 0
        assert calculate_payment(100000, 5, 0) == 0

    def test_interest_only_payment(self):
        assert calculate_interest_only_payment(160000, 6) == 800
        assert calculate_interest_only_payment(0, 6) == 0

    def test_remaining_balance_before_first_payment(self):
        assert calculate_remaining_balance(100000, 6, 30, 0) == 100000

    def test_remaining_balance_round_trip(self):
        """Principal portions over the whole term add back up to the loan."""
        principal = 250000
        rate = 6.5
        years = 15
        n = years * 12

        previous = principal
        total_principal = 0.0
        for k in range(1, n + 1):
            balance = calculate_remaining_balance(principal, rate, years, k)
            assert balance >= 0
            assert balance <= previous
            total_principal += previous - balance
            previous = balance

        assert total_principal == pytest.approx(principal, abs=1e-6)
        assert calculate_remaining_balance(principal, rate, years, n) == 0.0

    def test_remaining_balance_after_maturity(self):
        assert calculate_remaining_balance(100000, 5, 10, 121) == 0.0
        assert calculate_remaining_balance(100000, 5, 10, 500) == 0.0

    def test_remaining_balance_matches_schedule(self):
        schedule = generate_amortization_schedule(
            principal=100000, annual_rate=6, term_years=5
        )
        balance = calculate_remaining_balance(100000, 6, 5, 24)
        assert schedule[23]["ending_balance"] == pytest.approx(balance, abs=0.05)

    def test_zero_rate_loan_does_not_amortize(self):
        assert calculate_remaining_balance(100000, 0, 30, 120) == 100000

    def test_amortization_schedule_length(self):
        """Test amortization schedule has correct number of periods."""
        schedule = generate_amortization_schedule(
            principal=100000,
            annual_rate=6,
            term_years=5,
            io_months=0,
            total_months=60,
        )
        assert len(schedule) == 60

    def test_amortization_io_periods(self):
        """Test interest-only periods in amortization."""
        schedule = generate_amortization_schedule(
            principal=100000,
            annual_rate=6,
            term_years=5,
            io_months=12,
        )
        assert len(schedule) == 72
        # First 12 periods should have 0 principal
        for i in range(12):
            assert schedule[i]["principal"] == 0
            assert schedule[i]["interest"] == 500

    def test_amortization_final_balance(self):
        """Test that final balance is approximately zero."""
        schedule = generate_amortization_schedule(
            principal=100000,
            annual_rate=6,
            term_years=5,
        )
        assert abs(schedule[-1]["ending_balance"]) < 1

    def test_zero_rate_schedule_pays_off_straight_line(self):
        schedule = generate_amortization_schedule(
            principal=100000, annual_rate=0, term_years=5
        )
        assert len(schedule) == 60
        assert schedule[0]["principal"] == pytest.approx(1666.67, abs=0.01)
        assert schedule[0]["interest"] == 0
        assert schedule[-1]["ending_balance"] == 0
        assert sum(row["principal"] for row in schedule) == pytest.approx(100000, abs=1)

    def test_straight_line_payment(self):
        assert calculate_straight_line_payment(120000, 10) == 1000
        assert calculate_straight_line_payment(0, 10) == 0
        assert calculate_straight_line_payment(120000, 0) == 0

    def test_dscr_without_debt_is_not_applicable(self):
        assert calculate_dscr(12000, 0) is None
        assert calculate_dscr(12000, 10000) == pytest.approx(1.2)

    def test_loan_constant(self):
        constant = calculate_loan_constant(1000000, 5, 30)
        assert constant == pytest.approx(5368.22 * 12 / 1000000, abs=1e-6)
        assert calculate_loan_constant(0, 5, 30) == 0


class TestIRRCalculations:
    """Test IRR calculation functions."""

    def test_calculate_irr_simple(self):
        """Test IRR calculation with simple cash flows."""
        # Investment of 100, returns of 110 after 1 year = 10% return
        irr = calculate_irr([-100, 110])
        assert abs(irr - 0.10) < 0.001

    def test_calculate_irr_multi_period(self):
        """Test IRR with multiple periods."""
        cash_flows = [-100, 20, 20, 20, 20, 120]
        irr = calculate_irr(cash_flows)
        assert abs(irr - 0.20) < 0.01

    def test_calculate_npv(self):
        """Test NPV calculation."""
        npv = calculate_npv([-100, 50, 50, 50], 0.10)
        assert npv > 0

    def test_irr_negative_returns(self):
        """Test IRR with negative return scenario."""
        irr = calculate_irr([-100, 40, 40, 10])
        assert irr < 0

    def test_irr_requires_sign_change(self):
        with pytest.raises(ValueError):
            calculate_irr([-100, -10, -10])

    def test_multiple(self):
        assert calculate_multiple([-100, 50, 150]) == pytest.approx(2.0)


class TestHoldPeriodReturns:
    """Test the hold-then-sell IRR estimate."""

    def test_cash_flows_shape(self):
        cash_flows = build_hold_period_cash_flows(20000, 2000, 100000)
        assert len(cash_flows) == 6
        assert cash_flows[0] == -20000
        assert cash_flows[1] == 2000
        assert cash_flows[2] == pytest.approx(2060)

    def test_sale_proceeds_added_to_final_year(self):
        cash_flows = build_hold_period_cash_flows(
            20000, 0, 100000, selling_costs_percent=0, annual_growth_rate=0
        )
        # No growth, no selling costs: the investment comes back unchanged
        assert cash_flows == [-20000, 0, 0, 0, 0, 20000]

    def test_estimate(self):
        returns = estimate_hold_period_irr(20000, 2000, 100000)
        assert not returns.is_infinite_return
        assert returns.irr > 0
        assert returns.total_profit == pytest.approx(sum(returns.cash_flows))
        assert returns.equity_multiple == pytest.approx(
            (returns.total_profit + 20000) / 20000
        )
        assert returns.equity_multiple == calculate_multiple(returns.cash_flows)

    def test_hold_period_shorter_than_a_year_rejected(self):
        with pytest.raises(ValueError):
            build_hold_period_cash_flows(20000, 2000, 100000, hold_years=0)

    def test_no_cash_invested_is_infinite(self):
        returns = estimate_hold_period_irr(0, 2000, 100000)
        assert returns.is_infinite_return
        assert returns.irr is None
        assert returns.equity_multiple is None


class TestRentalMetrics:
    """Test buy-and-hold rental metrics."""

    def test_cash_to_close_with_seller_credits(self, financials):
        metrics = calculate_rental_metrics(financials)
        assert metrics.down_payment_amount == 20000
        assert metrics.total_closing_costs == 0
        assert metrics.total_seller_credits == 1700
        assert metrics.total_cash_to_close == 18300

    def test_operating_metrics(self, financials):
        metrics = calculate_rental_metrics(financials)
        assert metrics.loan_amount == 80000
        assert metrics.gross_annual_rent == 12000
        assert metrics.vacancy_loss == pytest.approx(600)
        assert metrics.effective_gross_income == pytest.approx(11400)
        assert metrics.total_operating_expenses == pytest.approx(4200)
        assert metrics.net_operating_income == pytest.approx(7200)
        assert metrics.cap_rate == pytest.approx(7.2)
        assert metrics.monthly_debt_service == pytest.approx(429.46, abs=0.01)
        assert metrics.loan_constant == pytest.approx(429.46 * 12 / 80000, abs=1e-5)
        assert metrics.monthly_cash_flow_no_debt == pytest.approx(600)
        assert metrics.monthly_cash_flow_with_debt == pytest.approx(170.54, abs=0.01)
        assert metrics.cash_on_cash_return == pytest.approx(
            metrics.monthly_cash_flow_with_debt * 12 / 18300 * 100
        )
        assert metrics.dscr == pytest.approx(7200 / (metrics.monthly_debt_service * 12))

    def test_variable_costs_use_gross_rent(self, rental_inputs):
        rental_inputs["other_monthly_income"] = 500
        metrics = calculate_rental_metrics(Financials(**rental_inputs))
        # Other income is added to EGI but not to the percentage base
        assert metrics.vacancy_loss == pytest.approx(600)
        assert metrics.maintenance_cost == pytest.approx(600)
        assert metrics.management_cost == pytest.approx(1200)
        assert metrics.effective_gross_income == pytest.approx(11400 + 6000)

    def test_closing_costs(self, rental_inputs):
        rental_inputs.update(
            origination_fee_percent=1, closing_fee=500, title_fee=700, attorney_fee=300
        )
        metrics = calculate_rental_metrics(Financials(**rental_inputs))
        assert metrics.origination_fee_amount == pytest.approx(800)
        assert metrics.total_closing_costs == pytest.approx(2300)
        assert metrics.total_cash_to_close == pytest.approx(20000 + 2300 - 1700)

    def test_credits_can_make_cash_to_close_negative(self, rental_inputs):
        rental_inputs.update(down_payment_percent=0, seller_credit_closing=5000)
        metrics = calculate_rental_metrics(Financials(**rental_inputs))
        assert metrics.total_cash_to_close == -6700
        assert metrics.cash_on_cash_return == 0

    def test_all_in_cap_rate_includes_rehab(self, rental_inputs):
        rental_inputs["rehab_cost"] = 20000
        metrics = calculate_rental_metrics(Financials(**rental_inputs))
        assert metrics.total_investment == 120000
        assert metrics.all_in_cap_rate == pytest.approx(7200 / 120000 * 100)

    def test_vacancy_monotonicity(self, rental_inputs):
        results = []
        for vacancy in (0, 5, 10, 25):
            rental_inputs["vacancy_rate"] = vacancy
            results.append(calculate_rental_metrics(Financials(**rental_inputs)))

        for lower, higher in zip(results, results[1:]):
            assert higher.net_operating_income < lower.net_operating_income
            assert higher.monthly_cash_flow_with_debt < lower.monthly_cash_flow_with_debt

    def test_down_payment_monotonicity(self, rental_inputs):
        results = []
        for down in (0, 20, 50, 80, 100):
            rental_inputs["down_payment_percent"] = down
            results.append(calculate_rental_metrics(Financials(**rental_inputs)))

        for lower, higher in zip(results, results[1:]):
            assert higher.loan_amount < lower.loan_amount
            assert higher.monthly_debt_service < lower.monthly_debt_service

        all_cash = results[-1]
        assert all_cash.loan_amount == 0
        assert all_cash.monthly_debt_service == 0
        assert all_cash.dscr is None

    def test_zero_price_and_rent_degrade_to_zero(self):
        metrics = calculate_rental_metrics(
            Financials(purchase_price=0, monthly_rents=[0], loan_interest_rate=5)
        )
        assert metrics.cap_rate == 0
        assert metrics.all_in_cap_rate == 0
        assert metrics.cash_on_cash_return == 0
        assert metrics.dscr is None
        assert metrics.net_operating_income == 0

    def test_multi_unit_rents(self, rental_inputs):
        rental_inputs["monthly_rents"] = [1000, 1200, 800]
        statement = calculate_operating_statement(Financials(**rental_inputs))
        assert statement.gross_annual_rent == 36000

    def test_deterministic(self, financials):
        assert calculate_rental_metrics(financials) == calculate_rental_metrics(financials)


class TestFinancialsValidation:
    """Malformed inputs are rejected when the record is built."""

    def test_rate_out_of_range(self, rental_inputs):
        rental_inputs["vacancy_rate"] = 150
        with pytest.raises(ValidationError):
            Financials(**rental_inputs)

    def test_negative_amount(self, rental_inputs):
        rental_inputs["monthly_taxes"] = -1
        with pytest.raises(ValidationError):
            Financials(**rental_inputs)

    def test_rents_required(self, rental_inputs):
        rental_inputs["monthly_rents"] = []
        with pytest.raises(ValidationError):
            Financials(**rental_inputs)

    def test_missing_purchase_price(self, rental_inputs):
        del rental_inputs["purchase_price"]
        with pytest.raises(ValidationError):
            Financials(**rental_inputs)

    def test_records_are_immutable(self, financials):
        with pytest.raises(ValidationError):
            financials.purchase_price = 1


class TestWholesale:
    """Test MAO and eligibility."""

    def test_mao(self):
        results = calculate_wholesale_metrics(
            WholesaleInputs(
                arv=200000,
                mao_percent_of_arv=50,
                estimated_rehab=30000,
                closing_cost=5000,
                wholesale_fee_goal=10000,
                seller_ask=40000,
            )
        )
        assert results.mao == 55000
        assert results.potential_fees == 15000
        assert results.is_eligible

    def test_zero_spread_is_not_eligible(self):
        results = calculate_wholesale_metrics(
            WholesaleInputs(
                arv=200000,
                mao_percent_of_arv=50,
                estimated_rehab=30000,
                closing_cost=5000,
                wholesale_fee_goal=10000,
                seller_ask=55000,
            )
        )
        assert results.potential_fees == 0
        assert results.is_eligible is False

    def test_negative_spread(self):
        results = calculate_wholesale_metrics(
            WholesaleInputs(arv=100000, mao_percent_of_arv=70, seller_ask=90000)
        )
        assert results.potential_fees == pytest.approx(-20000)
        assert not results.is_eligible

    def test_calculate_mao_helper(self):
        assert calculate_mao(300000, 70, 40000, 5000, 10000) == pytest.approx(155000)

    def test_assignability_carried_through(self):
        results = calculate_wholesale_metrics(
            WholesaleInputs(arv=100000, seller_ask=50000, is_assignable=False)
        )
        assert results.is_assignable is False
        assert results.is_eligible


class TestScheduleTotals:
    def test_total_interest_matches_payments(self):
        schedule = generate_amortization_schedule(100000, 6, 5)
        payment = calculate_payment(100000, 6, 5)
        assert calculate_total_interest(schedule) == pytest.approx(
            payment * 60 - 100000, abs=1
        )

    def test_profit_is_sum_of_flows(self):
        assert calculate_profit([-1000, 300, 400, 500]) == 200
