"""
Main calculation engine coordinator.

Fronts every calculator with the result cache and the performance recorder:
build key, look up, compute on a miss, store with dependency tags, record
a sample, return.
"""

import time
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable, Optional, TypeVar

import structlog

from .cache import ResultCache, build_cache_key
from .calculators import (
    BaseCalculator,
    CompoundInterestCalculator,
    DebtPayoffPlanner,
    ExpenseBasedFireCalculator,
    FireNumberCalculator,
    HealthcareCostCalculator,
    MonteCarloSimulator,
    SavingsRateOptimizer,
    SocialSecurityCalculator,
)
from .config.defaults import EngineConfig, get_default_config
from .config.loader import ConfigLoader
from .errors import CalculationError, InvalidParametersError
from .logging.config import get_calculation_logger, log_calculation
from .metrics import PerformanceRecorder, PerformanceSample
from .models.compound import CompoundInterestParams, CompoundInterestResult
from .models.debt import DebtPayoffParams, DebtPayoffResult
from .models.fire import (
    ExpenseBasedFireParams,
    ExpenseBasedFireResult,
    FireNumberParams,
    FireNumberResult,
)
from .models.healthcare import HealthcareProjectionParams, HealthcareProjectionResult
from .models.monte_carlo import MonteCarloParams, MonteCarloResult
from .models.savings import SavingsRateParams, SavingsRateResult
from .models.social_security import (
    DEFAULT_RETIREMENT_SCENARIOS,
    SocialSecurityParams,
    SocialSecurityResult,
)
from .utils.random import RandomSource
from .utils.time import Clock, elapsed_ms

logger = structlog.get_logger(__name__)

FIRE_TAG = "fire_calculations"
SAVINGS_TAG = "savings_plan"

R = TypeVar("R")


class FinancialCalculationEngine:
    """
    Coordinator for all projection calculators.

    One instance owns one cache and one performance recorder. Configuration,
    random source and clock are injected by the host; nothing is global.
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 random_source: Optional[RandomSource] = None,
                 clock: Optional[Clock] = None) -> None:
        """Initialize the calculation engine."""
        self.logger = logger
        self.calculation_logger = get_calculation_logger(__name__)
        self.config = config or get_default_config()
        self.clock = clock or Clock()

        self.cache = ResultCache(
            ttl_seconds=self.config.cache.ttl_seconds,
            max_entries=self.config.cache.max_entries,
            clock=self.clock,
        )
        self.recorder = PerformanceRecorder(
            max_samples=self.config.performance.max_samples,
            clock=self.clock,
        )

        self.compound = CompoundInterestCalculator(self.config)
        self.monte_carlo = MonteCarloSimulator(self.config, random_source=random_source)
        self.fire = FireNumberCalculator(self.config)
        self.expense_fire = ExpenseBasedFireCalculator(self.config)
        self.healthcare = HealthcareCostCalculator(self.config)
        self.social_security = SocialSecurityCalculator(self.config)
        self.debt = DebtPayoffPlanner(self.config)
        self.savings = SavingsRateOptimizer(self.config, clock=self.clock)

        self.logger.info(
            "Financial calculation engine initialized",
            cache_ttl_seconds=self.config.cache.ttl_seconds,
            cache_capacity=self.config.cache.max_entries,
        )

    @classmethod
    def from_config_dir(cls, config_dir: Optional[Path] = None,
                        overrides: Optional[dict[str, Any]] = None,
                        **kwargs: Any) -> "FinancialCalculationEngine":
        """Build an engine from ``engine.yaml`` plus caller overrides."""
        config = ConfigLoader.create(config_dir).load(overrides)
        return cls(config=config, **kwargs)

    def _run_cached(self, function_name: str, calculator: BaseCalculator[Any, R], params: Any,
                    tags: Iterable[str] = (), input_size: int = 1) -> R:
        """Serve from cache or compute, store and record."""
        started = time.perf_counter()
        key = build_cache_key(calculator.name, params)

        cached = self.cache.get(key)
        if cached is not None:
            duration = elapsed_ms(time.perf_counter, started)
            self.recorder.record(function_name, duration, cache_hit=True, input_size=input_size)
            log_calculation(self.calculation_logger, function_name, True, duration, input_size)
            return cached

        try:
            result = calculator.calculate(params)
        except CalculationError as e:
            duration = elapsed_ms(time.perf_counter, started)
            self.recorder.record(function_name, duration, cache_hit=False, input_size=input_size)
            if isinstance(e, InvalidParametersError):
                self.logger.warning(
                    "Calculation rejected invalid parameters",
                    function_name=function_name,
                    field=e.field,
                    rule=e.rule,
                    error=str(e)
                )
            else:
                self.logger.error(
                    "Calculation failed",
                    function_name=function_name,
                    error=str(e),
                    error_type=type(e).__name__
                )
            raise

        duration = elapsed_ms(time.perf_counter, started)
        self.cache.put(key, result, dependency_tags=tags, compute_duration_ms=duration)
        self.recorder.record(function_name, duration, cache_hit=False, input_size=input_size)
        log_calculation(self.calculation_logger, function_name, False, duration, input_size)
        return result

    def calculate_compound_interest(self, params: CompoundInterestParams) -> CompoundInterestResult:
        """Future value of a principal plus regular contributions."""
        return self._run_cached("calculate_compound_interest", self.compound, params)

    def run_monte_carlo_simulation(self, params: MonteCarloParams) -> MonteCarloResult:
        """Distribution of portfolio outcomes under random annual returns."""
        iterations = params.iterations or self.config.monte_carlo.iterations
        return self._run_cached("run_monte_carlo_simulation", self.monte_carlo, params,
                                input_size=iterations)

    def calculate_fire_number(self, params: FireNumberParams) -> FireNumberResult:
        """FIRE target with variants, adjustments and stress tests."""
        return self._run_cached("calculate_fire_number", self.fire, params,
                                tags=(FIRE_TAG,), input_size=max(1, len(params.expense_categories)))

    def calculate_expense_based_fire(self, params: ExpenseBasedFireParams) -> ExpenseBasedFireResult:
        """FIRE target built from categorized, geographically adjusted expenses."""
        return self._run_cached("calculate_expense_based_fire", self.expense_fire, params,
                                tags=(FIRE_TAG,), input_size=max(1, len(params.expense_categories)))

    def calculate_healthcare_cost_projections(
        self, params: HealthcareProjectionParams
    ) -> HealthcareProjectionResult:
        """Bridge healthcare costs from early retirement to Medicare."""
        return self._run_cached("calculate_healthcare_cost_projections", self.healthcare, params,
                                tags=(FIRE_TAG,), input_size=max(1, len(params.chronic_conditions)))

    def calculate_social_security_and_stress_testing(
        self, params: SocialSecurityParams
    ) -> SocialSecurityResult:
        """Social Security estimate and retirement stress scenarios."""
        scenarios = (params.stress_test_scenarios if params.stress_test_scenarios is not None
                     else DEFAULT_RETIREMENT_SCENARIOS)
        return self._run_cached("calculate_social_security_and_stress_testing", self.social_security,
                                params, tags=(FIRE_TAG,), input_size=max(1, len(scenarios)))

    def calculate_debt_payoff(self, params: DebtPayoffParams) -> DebtPayoffResult:
        """Month-by-month payoff plan under the chosen strategy."""
        tags = tuple(debt.id for debt in params.debts)
        return self._run_cached("calculate_debt_payoff", self.debt, params,
                                tags=tags, input_size=len(params.debts))

    def calculate_required_savings_rate(self, params: SavingsRateParams) -> SavingsRateResult:
        """Allocate a savings budget across prioritized goals."""
        # Pin the as-of date so cached plans never outlive the day they were made
        if params.as_of is None:
            params = replace(params, as_of=self.clock.today())
        tags = tuple(goal.id for goal in params.goals) + (SAVINGS_TAG,)
        return self._run_cached("calculate_required_savings_rate", self.savings, params,
                                tags=tags, input_size=len(params.goals))

    def clear_cache(self, tags: Optional[Iterable[str]] = None) -> int:
        """Drop cached results; all of them when no tags are given."""
        tags = None if tags is None else list(tags)
        removed = self.cache.invalidate(tags)
        self.logger.info("Cache cleared", tags=tags, removed=removed)
        return removed

    def get_cache_stats(self) -> dict[str, Any]:
        return self.cache.stats()

    def get_performance_metrics(self) -> list[PerformanceSample]:
        return self.recorder.get_samples()

    def get_performance_stats(self) -> dict[str, Any]:
        return self.recorder.get_stats()
