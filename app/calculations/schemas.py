"""
Deal Input and Output Records

Immutable value records consumed and produced by the calculators. Inputs are
validated when constructed, so a calculator never sees a rate outside
[0, 100], a negative amount or an empty rent roll.
"""

from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

Percent = Annotated[float, Field(ge=0, le=100)]
Money = Annotated[float, Field(ge=0)]
Years = Annotated[int, Field(ge=0)]
Months = Annotated[int, Field(ge=0)]
GrowthRate = Annotated[float, Field(ge=-100, le=100)]


class Record(BaseModel):
    """Base for all engine records: immutable, no unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")


# --- Rental ---


class Financials(Record):
    """Financial inputs of a buy-and-hold rental."""

    list_price: Money = 0.0
    purchase_price: Money
    rehab_cost: Money = 0.0
    down_payment_percent: Percent = 0.0

    # Income
    monthly_rents: List[Money] = Field(..., min_length=1)
    other_monthly_income: Money = 0.0

    # Variable expenses, as a percentage of gross rent
    vacancy_rate: Percent = 0.0
    maintenance_rate: Percent = 0.0
    management_rate: Percent = 0.0
    capex_rate: Percent = 0.0

    # Fixed monthly expenses
    monthly_taxes: Money = 0.0
    monthly_insurance: Money = 0.0
    monthly_water_sewer: Money = 0.0
    monthly_street_lights: Money = 0.0
    monthly_gas: Money = 0.0
    monthly_electric: Money = 0.0
    monthly_landscaping: Money = 0.0
    monthly_hoa_fee: Money = 0.0
    operating_misc_fee: Money = 0.0

    # Loan terms
    loan_interest_rate: Percent = 0.0
    loan_term_years: Years = 30
    origination_fee_percent: Percent = 0.0

    # Fixed closing fees
    closing_fee: Money = 0.0
    processing_fee: Money = 0.0
    appraisal_fee: Money = 0.0
    title_fee: Money = 0.0
    broker_agent_fee: Money = 0.0
    home_warranty_fee: Money = 0.0
    attorney_fee: Money = 0.0
    closing_misc_fee: Money = 0.0

    # Seller credits, each reducing cash to close
    seller_credit_tax: Money = 0.0
    seller_credit_sewer: Money = 0.0
    seller_credit_origination: Money = 0.0
    seller_credit_closing: Money = 0.0
    seller_credit_rents: Money = 0.0
    seller_credit_security_deposit: Money = 0.0
    seller_credit_misc: Money = 0.0


class OperatingStatement(Record):
    """Annual income and operating expense lines of a rental."""

    gross_annual_rent: float
    other_annual_income: float
    vacancy_loss: float
    effective_gross_income: float
    maintenance_cost: float
    management_cost: float
    capex_cost: float
    fixed_operating_costs: float
    total_operating_expenses: float
    net_operating_income: float


class CalculatedMetrics(Record):
    """
    Rental deal metrics.

    Income and expense amounts are annual; fields prefixed ``monthly_`` are
    monthly. ``dscr`` is None when the deal carries no debt service.
    """

    down_payment_amount: float
    loan_amount: float
    origination_fee_amount: float
    total_closing_costs: float
    total_seller_credits: float
    total_cash_to_close: float
    total_investment: float
    monthly_debt_service: float
    annual_debt_service: float
    loan_constant: float

    gross_annual_rent: float
    other_annual_income: float
    vacancy_loss: float
    effective_gross_income: float
    maintenance_cost: float
    management_cost: float
    capex_cost: float
    fixed_operating_costs: float
    total_operating_expenses: float
    net_operating_income: float

    cap_rate: float
    all_in_cap_rate: float
    cash_on_cash_return: float
    dscr: Optional[float] = None
    monthly_cash_flow_no_debt: float
    monthly_cash_flow_with_debt: float


# --- Wholesale ---


class WholesaleInputs(Record):
    arv: Money
    mao_percent_of_arv: Percent = 70.0
    estimated_rehab: Money = 0.0
    closing_cost: Money = 0.0
    wholesale_fee_goal: Money = 0.0
    seller_ask: Money = 0.0
    is_assignable: bool = True


class WholesaleCalculations(Record):
    mao: float
    potential_fees: float
    is_eligible: bool
    is_assignable: bool


# --- Subject-To ---

ExitPlanType = Literal["Rental", "Wrap", "Flip", "Wholesale"]


class SubjectToInputs(Record):
    """Loan-assumption deal inputs. Monthly amounts unless noted."""

    # Existing loan and seller
    existing_loan_balance: Money = 0.0
    monthly_piti: Money = 0.0
    reinstatement_needed: Money = 0.0
    seller_cash_needed: Money = 0.0
    seller_second_note_amount: Money = 0.0
    seller_second_note_rate: Percent = 0.0
    seller_second_note_term: Years = 0
    closing_costs: Money = 0.0
    liens_judgments: Money = 0.0
    hoa_fees: Money = 0.0
    past_due_taxes: Money = 0.0
    escrow_shortage: Money = 0.0

    # Income
    market_rent: Money = 0.0
    other_monthly_income: Money = 0.0
    vacancy_rate: Percent = 0.0

    # Expenses
    monthly_taxes: Money = 0.0
    monthly_insurance: Money = 0.0
    maintenance_rate: Percent = 0.0
    management_rate: Percent = 0.0
    capex_rate: Percent = 0.0
    monthly_utilities: Money = 0.0

    # Rehab
    rehab_cost: Money = 0.0

    # Investor capital
    private_money_amount: Money = 0.0
    private_money_rate: Percent = 0.0
    wholesale_fee: Money = 0.0

    # Exit
    exit_plan_type: ExitPlanType = "Rental"
    sale_price: Money = 0.0
    resale_costs_percent: Percent = 0.0
    agent_fees_percent: Percent = 0.0

    # Legal
    trust_setup_fees: Money = 0.0


class SubjectToCalculations(Record):
    total_entry_fee: float
    total_investment: float

    gross_income: float
    vacancy_loss: float
    effective_income: float
    total_expenses: float
    net_operating_income: float

    existing_loan_payment: float
    seller_second_payment: float
    private_money_payment: float
    total_debt_service: float

    monthly_spread: float
    monthly_cash_flow: float
    cash_on_cash_return: float

    total_payoff: float
    projected_profit: float
    roi: float


# --- Seller Financing ---

PaymentType = Literal["Amortization", "Interest Only"]


class SellerFinancingExpenses(Record):
    vacancy_rate: Percent = 0.0
    maintenance_rate: Percent = 0.0
    management_rate: Percent = 0.0
    capex_rate: Percent = 0.0
    monthly_taxes: Money = 0.0
    monthly_insurance: Money = 0.0
    monthly_hoa: Money = 0.0
    monthly_water_sewer: Money = 0.0
    monthly_street_lights: Money = 0.0
    monthly_gas: Money = 0.0
    monthly_electric: Money = 0.0
    monthly_landscaping: Money = 0.0
    monthly_misc_fees: Money = 0.0


class SellerFinancingInputs(Record):
    purchase_price: Money
    down_payment: Money = 0.0
    seller_loan_rate: Percent = 0.0
    loan_term: Years = 30
    balloon_years: Years = 0
    payment_type: PaymentType = "Amortization"
    market_rent: Money = 0.0
    other_monthly_income: Money = 0.0
    rehab_cost: Money = 0.0
    expenses: SellerFinancingExpenses = SellerFinancingExpenses()

    @model_validator(mode="after")
    def check_down_payment(self):
        """The down payment cannot exceed the purchase price."""
        if self.down_payment > self.purchase_price:
            raise ValueError("down_payment cannot exceed purchase_price")
        return self


class SellerFinancingCalculations(Record):
    loan_amount: float
    monthly_payment: float
    spread_vs_market_rent: float
    return_on_down_payment: float
    balloon_payment: float

    gross_income: float
    vacancy_loss: float
    effective_income: float
    operating_expenses: float
    net_operating_income: float
    cash_flow: float
    cash_on_cash_return: float


# --- BRRRR ---


class BrrrrPurchaseCosts(Record):
    points: Money = 0.0
    prepaid_hazard_insurance: Money = 0.0
    prepaid_flood_insurance: Money = 0.0
    prepaid_property_tax: Money = 0.0
    annual_assessments: Money = 0.0
    title_escrow_fees: Money = 0.0
    attorney_fees: Money = 0.0
    inspection_cost: Money = 0.0
    recording_fees: Money = 0.0
    appraisal_fees: Money = 0.0
    broker_fees: Money = 0.0
    other_fees: Money = 0.0


class BrrrrExteriorRehab(Record):
    roof: Money = 0.0
    gutters: Money = 0.0
    garage: Money = 0.0
    siding: Money = 0.0
    landscaping: Money = 0.0
    painting: Money = 0.0
    septic: Money = 0.0
    decks: Money = 0.0
    foundation: Money = 0.0
    electrical: Money = 0.0
    other: Money = 0.0


class BrrrrInteriorRehab(Record):
    demo: Money = 0.0
    sheetrock: Money = 0.0
    plumbing: Money = 0.0
    carpentry: Money = 0.0
    windows: Money = 0.0
    doors: Money = 0.0
    electrical: Money = 0.0
    painting: Money = 0.0
    hvac: Money = 0.0
    cabinets: Money = 0.0
    framing: Money = 0.0
    flooring: Money = 0.0
    basement: Money = 0.0
    other: Money = 0.0


class BrrrrGeneralRehab(Record):
    permits: Money = 0.0
    termites: Money = 0.0
    mold: Money = 0.0
    misc: Money = 0.0


class BrrrrRehabCosts(Record):
    exterior: BrrrrExteriorRehab = BrrrrExteriorRehab()
    interior: BrrrrInteriorRehab = BrrrrInteriorRehab()
    general: BrrrrGeneralRehab = BrrrrGeneralRehab()


class BrrrrFinancing(Record):
    is_cash: bool = False
    loan_amount: Money = 0.0
    interest_rate: Percent = 0.0
    points: Percent = 0.0
    other_charges: Money = 0.0
    rehab_timeline_months: Months = 0


class BrrrrRefinance(Record):
    loan_ltv: Percent = 75.0
    interest_rate: Percent = 0.0
    closing_costs: Money = 0.0


class BrrrrOperatingExpenses(Record):
    monthly_taxes: Money = 0.0
    monthly_insurance: Money = 0.0
    monthly_hoa: Money = 0.0
    monthly_water_sewer: Money = 0.0
    monthly_street_lights: Money = 0.0
    monthly_gas: Money = 0.0
    monthly_electric: Money = 0.0
    monthly_landscaping: Money = 0.0
    monthly_misc_fees: Money = 0.0

    vacancy_rate: Percent = 0.0
    maintenance_rate: Percent = 0.0
    capex_rate: Percent = 0.0
    management_rate: Percent = 0.0

    other_monthly_income: Money = 0.0


class BrrrrInputs(Record):
    purchase_price: Money
    arv: Money
    purchase_costs: BrrrrPurchaseCosts = BrrrrPurchaseCosts()
    rehab_costs: BrrrrRehabCosts = BrrrrRehabCosts()
    financing: BrrrrFinancing = BrrrrFinancing()
    refinance: BrrrrRefinance = BrrrrRefinance()
    expenses: BrrrrOperatingExpenses = BrrrrOperatingExpenses()
    monthly_rent: Money = 0.0
    holding_costs_monthly: Money = 0.0


class BrrrrRevenueBreakdown(Record):
    gross_rent: float
    other_income: float
    vacancy_loss: float
    effective_income: float


class BrrrrExpenseBreakdown(Record):
    property_taxes: float
    insurance: float
    hoa: float
    utilities: float
    repairs_maintenance: float
    capex: float
    management: float
    misc: float
    debt_service: float
    total_operating_expenses: float
    total_expenses: float


class BrrrrCalculations(Record):
    """
    BRRRR project results.

    ``roi`` is None when ``is_infinite_return`` is set, i.e. the refinance
    recovered all of the capital put into the deal.
    """

    total_purchase_closing_costs: float
    total_exterior_rehab: float
    total_interior_rehab: float
    total_general_rehab: float
    total_rehab_cost: float
    total_holding_costs: float
    initial_loan_interest: float
    initial_loan_points: float
    total_financing_costs: float
    total_project_cost: float

    refinance_loan_amount: float
    refi_closing_costs: float
    net_refi_proceeds: float
    refinance_monthly_payment: float
    cash_left_in_deal: float
    cash_out_amount: float

    monthly_revenue: float
    monthly_expenses: float
    monthly_cash_flow_post_refi: float
    annual_cash_flow: float
    roi: Optional[float] = None
    is_infinite_return: bool

    revenue: BrrrrRevenueBreakdown
    expenses: BrrrrExpenseBreakdown


# --- Projections ---


class ProjectionAssumptions(Record):
    """Forward-looking annual rates, as percentages."""

    appreciation_rate: GrowthRate = 3.0
    income_growth_rate: GrowthRate = 3.0
    expense_growth_rate: GrowthRate = 2.0


class ProjectionYear(Record):
    year: int
    property_value: int
    loan_balance: int
    equity: int
    gross_income: int
    operating_expenses: int
    net_operating_income: int
    debt_service: int
    cash_flow: int
    cumulative_cash_flow: int
    cumulative_appreciation: int
    cumulative_principal_paydown: int
    total_return: int  # cash flow + principal paydown + appreciation


class ProjectionSummary(Record):
    years: int
    total_return: int
    equity: int
    cumulative_cash_flow: int


# --- Hold-period returns ---


class HoldPeriodReturns(Record):
    """IRR and multiple of a hold-then-sell scenario. Ratios are None when infinite."""

    irr: Optional[float] = None
    total_profit: float
    equity_multiple: Optional[float] = None
    is_infinite_return: bool = False
    cash_flows: List[float] = Field(default_factory=list)
