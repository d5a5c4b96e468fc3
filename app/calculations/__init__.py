"""
Deal Calculation Engine

Pure calculators for real estate investment analysis: rental metrics,
wholesale MAO, subject-to, seller financing, BRRRR and long-term projections.
Every calculator takes one input record and returns one output record.
"""

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
from app.calculations.brrrr import calculate_brrrr_metrics
from app.calculations.projections import calculate_projections
from app.calculations.rental import calculate_rental_metrics
from app.calculations.seller_financing import calculate_seller_financing_metrics
from app.calculations.subject_to import calculate_subject_to_metrics
from app.calculations.wholesale import calculate_wholesale_metrics

__all__ = [
    "amortization",
    "brrrr",
    "irr",
    "projections",
    "rental",
    "seller_financing",
    "subject_to",
    "wholesale",
    "calculate_brrrr_metrics",
    "calculate_projections",
    "calculate_rental_metrics",
    "calculate_seller_financing_metrics",
    "calculate_subject_to_metrics",
    "calculate_wholesale_metrics",
]
