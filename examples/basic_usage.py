#!/usr/bin/env python3
"""
Basic Usage Example - finproj Calculation Engine

This script walks one household through the engine:
- Initialize the engine with logging
- Project investment growth and a Monte Carlo range
- Size a FIRE target with healthcare and Social Security
- Plan debt payoff and savings goals
- Inspect cache and performance statistics

Run: python examples/basic_usage.py
"""

from datetime import date

from finproj.engine import FinancialCalculationEngine
from finproj.logging.config import configure_logging
from finproj.models.common import Priority
from finproj.models.compound import CompoundInterestParams
from finproj.models.debt import DebtAccount, DebtPayoffParams, DebtStrategy
from finproj.models.fire import FireNumberParams
from finproj.models.healthcare import HealthcareProjectionParams
from finproj.models.monte_carlo import MonteCarloParams
from finproj.models.savings import Goal, SavingsRateParams
from finproj.models.social_security import SocialSecurityParams


def demo_growth(engine: FinancialCalculationEngine) -> None:
    print("\n📈 Investment growth")
    result = engine.calculate_compound_interest(
        CompoundInterestParams(principal=25000, annual_rate=0.07, compounding_frequency=12,
                               time_in_years=20, contribution=500)
    )
    print(f"   Future value:        ${result.future_value:,.0f}")
    print(f"   Total contributions: ${result.total_contributions:,.0f}")
    print(f"   Interest earned:     ${result.total_interest_earned:,.0f}")

    simulation = engine.run_monte_carlo_simulation(
        MonteCarloParams(initial_value=25000, monthly_contribution=500, years_to_project=20,
                         expected_return=0.07, volatility=0.15, iterations=2000,
                         target_value=500000, seed=7)
    )
    for projection in simulation.projections:
        print(f"   P{projection.percentile:<3} ${projection.final_value:,.0f} "
              f"(${projection.real_value:,.0f} in today's money)")
    print(f"   Chance of reaching $500k: {simulation.statistics.probability_of_target:.0%}")


def demo_fire(engine: FinancialCalculationEngine) -> None:
    print("\n🔥 FIRE target")
    fire = engine.calculate_fire_number(FireNumberParams(monthly_expenses=4500, safety_margin=0.1))
    print(f"   Base FIRE number:     ${fire.fire_number:,.0f}")
    print(f"   Adjusted FIRE number: ${fire.adjusted_fire_number:,.0f}")

    healthcare = engine.calculate_healthcare_cost_projections(
        HealthcareProjectionParams(current_age=38, retirement_age=50, current_healthcare_cost=7200,
                                   total_fire_number=fire.adjusted_fire_number)
    )
    print(f"   Healthcare bridge needs ${healthcare.fire_impact.healthcare_fire_number:,.0f}")

    social_security = engine.calculate_social_security_and_stress_testing(
        SocialSecurityParams(current_age=38, current_income=110000, retirement_age=50,
                             base_fire_number=fire.adjusted_fire_number)
    )
    strategy = social_security.optimized_strategy
    print(f"   Claim Social Security at {strategy.recommended_social_security_age}, "
          f"target ${strategy.recommended_fire_number:,.0f} "
          f"({strategy.confidence_level:.0%} confidence)")


def demo_plans(engine: FinancialCalculationEngine) -> None:
    print("\n💳 Debt payoff")
    debts = (
        DebtAccount(id="visa", name="Visa", balance=6400, annual_interest_rate=0.21,
                    minimum_payment=160, credit_limit=12000),
        DebtAccount(id="auto", name="Auto Loan", balance=14500, annual_interest_rate=0.059,
                    minimum_payment=340),
    )
    plan = engine.calculate_debt_payoff(
        DebtPayoffParams(debts=debts, extra_payment=400, strategy=DebtStrategy.AVALANCHE)
    )
    print(f"   Debt free in {plan.total_months} months, ${plan.total_interest:,.0f} interest")

    print("\n🎯 Savings goals")
    goals = (
        Goal(id="buffer", name="Emergency Fund", target_amount=20000,
             target_date=date(2027, 6, 1), priority=Priority.HIGH),
        Goal(id="home", name="Home Down Payment", target_amount=80000,
             target_date=date(2031, 1, 1), is_flexible=True),
    )
    savings = engine.calculate_required_savings_rate(
        SavingsRateParams(current_age=38, current_income=110000, current_savings=15000,
                          monthly_expenses=4500, goals=goals)
    )
    print(f"   Recommended savings rate: {savings.recommended_savings_rate:.1%}")
    print(f"   Feasibility: {savings.feasibility.value}")
    for allocation in savings.goal_breakdown:
        print(f"   • {allocation.goal_name}: ${allocation.allocated_monthly_savings:,.0f}/month")


def main():
    print("🚀 finproj basic usage")
    print("=" * 40)

    configure_logging(level="WARNING")
    engine = FinancialCalculationEngine()

    demo_growth(engine)
    demo_fire(engine)
    demo_plans(engine)

    # Repeat one call to show a cache hit
    demo_fire(engine)

    stats = engine.get_performance_stats()
    print(f"\n📊 {stats['total_calls']} calls, {stats['cache_hits']} served from cache")
    print(f"   Cache: {engine.get_cache_stats()}")


if __name__ == "__main__":
    main()
