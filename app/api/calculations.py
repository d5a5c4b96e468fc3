"""
Deal calculation API endpoints.

These endpoints accept deal inputs and return the full recalculated output.
Called after every field edit for real-time updates; nothing is stored.
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import List, Optional

from app.calculations import (
    amortization,
    brrrr,
    irr,
    projections,
    rental,
    seller_financing,
    subject_to,
    wholesale,
)
from app.calculations.schemas import (
    BrrrrCalculations,
    BrrrrInputs,
    CalculatedMetrics,
    Financials,
    HoldPeriodReturns,
    ProjectionAssumptions,
    ProjectionSummary,
    ProjectionYear,
    SellerFinancingCalculations,
    SellerFinancingInputs,
    SubjectToCalculations,
    SubjectToInputs,
    WholesaleCalculations,
    WholesaleInputs,
)
from app.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/rental", response_model=CalculatedMetrics)
async def calculate_rental(inputs: Financials):
    """Calculate buy-and-hold rental metrics."""
    metrics = rental.calculate_rental_metrics(inputs)
    logger.debug(
        "Rental metrics: noi=%.2f cash_to_close=%.2f",
        metrics.net_operating_income,
        metrics.total_cash_to_close,
    )
    return metrics


@router.post("/wholesale", response_model=WholesaleCalculations)
async def calculate_wholesale(inputs: WholesaleInputs):
    """Calculate MAO and assignment-fee eligibility."""
    return wholesale.calculate_wholesale_metrics(inputs)


@router.post("/subject-to", response_model=SubjectToCalculations)
async def calculate_subject_to(inputs: SubjectToInputs):
    """Calculate subject-to entry cash, cash flow and exit returns."""
    return subject_to.calculate_subject_to_metrics(inputs)


@router.post("/seller-financing", response_model=SellerFinancingCalculations)
async def calculate_seller_financing(inputs: SellerFinancingInputs):
    """Calculate seller-carried note payment and returns."""
    return seller_financing.calculate_seller_financing_metrics(inputs)


@router.post("/brrrr", response_model=BrrrrCalculations)
async def calculate_brrrr(inputs: BrrrrInputs):
    """Calculate BRRRR project cost, refinance and post-refi returns."""
    results = brrrr.calculate_brrrr_metrics(inputs)
    if results.is_infinite_return:
        logger.debug(
            "BRRRR refinance recovers all capital: cash_left=%.2f",
            results.cash_left_in_deal,
        )
    return results


class ProjectionRequest(BaseModel):
    """Input for long-term projections. Assumptions default from settings."""

    financials: Financials
    assumptions: Optional[ProjectionAssumptions] = None


class ProjectionResponse(BaseModel):
    """Response with yearly projections and the end-of-horizon summary."""

    assumptions: ProjectionAssumptions
    summary: ProjectionSummary
    years: List[ProjectionYear]


def default_assumptions() -> ProjectionAssumptions:
    settings = get_settings()
    return ProjectionAssumptions(
        appreciation_rate=settings.default_appreciation_rate,
        income_growth_rate=settings.default_income_growth_rate,
        expense_growth_rate=settings.default_expense_growth_rate,
    )


@router.post("/projections", response_model=ProjectionResponse)
async def calculate_projections(inputs: ProjectionRequest):
    """Project value, loan balance, cash flow and equity 30 years forward."""
    assumptions = inputs.assumptions or default_assumptions()
    years = projections.calculate_projections(inputs.financials, assumptions)

    return ProjectionResponse(
        assumptions=assumptions,
        summary=projections.summarize_projections(years),
        years=years,
    )


class HoldPeriodInput(BaseModel):
    """Input for the hold-then-sell IRR estimate."""

    initial_investment: float
    year1_cash_flow: float
    initial_property_value: float = Field(..., ge=0)
    selling_costs_percent: Optional[float] = Field(None, ge=0, le=100)
    annual_growth_rate: Optional[float] = Field(None, ge=-100, le=100)
    hold_years: Optional[int] = Field(None, ge=1, le=50)


@router.post("/irr", response_model=HoldPeriodReturns)
async def calculate_irr_endpoint(inputs: HoldPeriodInput):
    """Estimate IRR, profit and equity multiple over a short hold."""
    settings = get_settings()

    selling_costs_percent = inputs.selling_costs_percent
    if selling_costs_percent is None:
        selling_costs_percent = settings.default_selling_costs_percent
    annual_growth_rate = inputs.annual_growth_rate
    if annual_growth_rate is None:
        annual_growth_rate = settings.default_appreciation_rate

    try:
        return irr.estimate_hold_period_irr(
            inputs.initial_investment,
            inputs.year1_cash_flow,
            inputs.initial_property_value,
            selling_costs_percent=selling_costs_percent,
            annual_growth_rate=annual_growth_rate,
            hold_years=inputs.hold_years or settings.default_hold_years,
        )
    except ValueError as e:
        logger.warning("Hold-period IRR failed: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    principal: float = Field(..., ge=0)
    annual_rate: float = Field(..., ge=0, le=100)
    term_years: int = Field(30, ge=0, le=50)
    io_months: int = Field(0, ge=0, le=600)
    total_months: Optional[int] = Field(None, ge=0, le=600)


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    schedule = amortization.generate_amortization_schedule(
        principal=inputs.principal,
        annual_rate=inputs.annual_rate,
        term_years=inputs.term_years,
        io_months=inputs.io_months,
        total_months=inputs.total_months,
    )

    monthly_payment = amortization.calculate_payment(
        inputs.principal, inputs.annual_rate, inputs.term_years
    )
    if inputs.annual_rate <= 0:
        monthly_payment = amortization.calculate_straight_line_payment(
            inputs.principal, inputs.term_years
        )

    return {
        "monthly_payment": monthly_payment,
        "schedule": schedule,
        "total_interest": amortization.calculate_total_interest(schedule),
        "total_principal": sum(row["principal"] for row in schedule),
    }
