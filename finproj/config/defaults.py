"""Default configuration parameters for the projection engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheParams:
    """Result cache parameters."""
    ttl_seconds: float = 300.0          # Fixed per cache instance
    max_entries: int = 1000             # Oldest-inserted entry evicted at cap


@dataclass(frozen=True)
class PerformanceParams:
    """Performance recorder parameters."""
    max_samples: int = 1000             # FIFO ring buffer size


@dataclass(frozen=True)
class MonteCarloDefaults:
    """Monte Carlo simulation defaults."""
    iterations: int = 1000
    inflation_rate: float = 0.03


@dataclass(frozen=True)
class FireDefaults:
    """FIRE calculation policy constants."""
    withdrawal_rate: float = 0.04                   # 4% rule
    coverage_gap_years: int = 10                    # Years until Medicare eligibility
    social_security_discount_rate: float = 0.03     # Conservative discount rate
    social_security_retirement_age: int = 62        # Assumed early retirement age
    healthcare_inflation_rate: float = 0.06
    minimum_stress_withdrawal_rate: float = 0.025


@dataclass(frozen=True)
class DebtDefaults:
    """Debt payoff simulation parameters."""
    max_months: int = 1200                          # 100 years safety bound
    consolidation_rate: float = 0.08
    consolidation_term_months: int = 60


@dataclass(frozen=True)
class SavingsDefaults:
    """Savings allocation parameters."""
    max_savings_rate: float = 0.5
    inflation_rate: float = 0.03
    milestone_months: int = 24
    milestone_interval_months: int = 3
    max_timeline_extension: float = 2.0


@dataclass(frozen=True)
class EngineConfig:
    """Complete engine configuration."""
    cache: CacheParams
    performance: PerformanceParams
    monte_carlo: MonteCarloDefaults
    fire: FireDefaults
    debt: DebtDefaults
    savings: SavingsDefaults


def get_default_config() -> EngineConfig:
    """Get the default configuration instance."""
    return EngineConfig(
        cache=CacheParams(),
        performance=PerformanceParams(),
        monte_carlo=MonteCarloDefaults(),
        fire=FireDefaults(),
        debt=DebtDefaults(),
        savings=SavingsDefaults(),
    )
