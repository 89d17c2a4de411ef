#!/usr/bin/env python3
"""Performance benchmark script for the finproj engine."""

import sys
import time
from pathlib import Path
from typing import Any, Dict

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from finproj.engine import FinancialCalculationEngine
from finproj.models.debt import DebtAccount, DebtPayoffParams
from finproj.models.monte_carlo import MonteCarloParams


def benchmark_monte_carlo(iterations: int) -> Dict[str, float]:
    """Time a cold simulation against a cached repeat."""
    print(f"🏃 Benchmarking Monte Carlo with {iterations} iterations...")

    engine = FinancialCalculationEngine()
    params = MonteCarloParams(initial_value=100000, monthly_contribution=1000, years_to_project=30,
                              expected_return=0.07, volatility=0.15, iterations=iterations, seed=1)

    start_time = time.perf_counter()
    engine.run_monte_carlo_simulation(params)
    cold_time = time.perf_counter() - start_time

    start_time = time.perf_counter()
    engine.run_monte_carlo_simulation(params)
    cached_time = time.perf_counter() - start_time

    return {"cold_time": cold_time, "cached_time": cached_time}


def benchmark_debt_payoff(debt_count: int) -> Dict[str, Any]:
    print(f"🏃 Benchmarking debt payoff with {debt_count} debts...")

    engine = FinancialCalculationEngine()
    debts = tuple(
        DebtAccount(id=f"debt-{i}", name=f"Debt {i}", balance=1000.0 + i * 250,
                    annual_interest_rate=0.05 + (i % 10) * 0.015, minimum_payment=40.0 + i * 5)
        for i in range(debt_count)
    )

    start_time = time.perf_counter()
    result = engine.calculate_debt_payoff(DebtPayoffParams(debts=debts, extra_payment=500))
    elapsed = time.perf_counter() - start_time

    return {"time": elapsed, "months": result.total_months}


def main():
    """Main benchmark function."""
    print("⚡ finproj Performance Benchmark")
    print("=" * 40)

    for iterations in [1000, 5000, 10000]:
        results = benchmark_monte_carlo(iterations)
        print(f"\n📊 Results for {iterations} iterations:")
        print(f"   Cold:   {results['cold_time'] * 1000:.1f}ms")
        print(f"   Cached: {results['cached_time'] * 1000:.3f}ms")

    for debt_count in [3, 10, 50]:
        results = benchmark_debt_payoff(debt_count)
        print(f"\n📊 Results for {debt_count} debts:")
        print(f"   Time: {results['time'] * 1000:.1f}ms")
        print(f"   Payoff horizon: {results['months']} months")


if __name__ == "__main__":
    main()
