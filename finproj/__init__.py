"""
finproj - Personal Finance Projection Engine

A pure computation library for long-horizon personal-finance projections:
compound growth, Monte Carlo outcome distributions, FIRE target numbers,
debt payoff schedules and savings allocation across competing goals.
"""

__version__ = "0.1.0"
__author__ = "finproj Team"
