"""
Savings-rate allocation across prioritized, deadline-bound goals.

Each goal gets a required monthly contribution from the annuity inverse.
Goals are ordered by priority and achievability, flexible goals are
stretched when the income-derived ceiling is exceeded, and the ceiling is
then filled in order.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

import structlog

from ..config.defaults import EngineConfig
from ..errors import InvalidParametersError
from ..models.common import Priority
from ..models.savings import (
    BudgetAdjustment,
    BudgetConstraints,
    Feasibility,
    Goal,
    GoalAllocation,
    GoalProgress,
    IncomeStrategy,
    Milestone,
    OptimizationPreferences,
    RiskTolerance,
    SavingsRateParams,
    SavingsRateResult,
    ScenarioOutcome,
    TimelineAdjustment,
    TimelineAnalysis,
)
from ..utils.numeric import required_periodic_payment
from ..utils.time import Clock, add_months, months_between
from .base import (
    BaseCalculator,
    require_non_negative,
    require_number,
    require_positive,
    require_positive_int,
)
from .fire import category_savings_rule

logger = structlog.get_logger(__name__)

RISK_RETURNS = {
    RiskTolerance.CONSERVATIVE: 0.04,
    RiskTolerance.MODERATE: 0.06,
    RiskTolerance.AGGRESSIVE: 0.08,
}

# strategy, share of annual income, timeframe, effort, probability
INCOME_STRATEGIES = (
    ("Negotiate a raise or promotion", 0.05, "3-6 months", "medium", 0.6),
    ("Develop a side income stream", 0.10, "6-12 months", "high", 0.4),
    ("Earn a professional certification", 0.15, "12-24 months", "high", 0.5),
    ("Maximize tax-advantaged account contributions", 0.02, "Immediate", "low", 0.9),
)

SCENARIO_RETURN_SHIFT = 0.02
FLEXIBLE_SCENARIO_EXTENSION = 1.5
CHALLENGING_COVERAGE = 0.75


@dataclass
class _GoalPlan:
    goal: Goal
    months: int
    target: float
    required: float
    achievability: float
    adjustment: Optional[TimelineAdjustment] = None
    allocated: float = 0.0


def achievability_score(ceiling: float, required: float) -> float:
    """0-100 score of how much of the requirement the ceiling covers."""
    if required <= 0:
        return 100.0
    return min(100.0, ceiling / required * 100)


class SavingsRateOptimizer(BaseCalculator[SavingsRateParams, SavingsRateResult]):
    """Allocates a monthly savings budget across competing goals."""

    name = "savings_rate"

    def __init__(self, config: Optional[EngineConfig] = None, clock: Optional[Clock] = None) -> None:
        super().__init__(config)
        self.clock = clock or Clock()

    def _as_of(self, params: SavingsRateParams) -> date:
        return params.as_of or self.clock.today()

    def validate(self, params: SavingsRateParams) -> None:
        require_positive_int(params.current_age, "current_age", self.name)
        require_positive(params.current_income, "current_income", self.name)
        require_non_negative(params.current_savings, "current_savings", self.name)
        require_non_negative(params.monthly_expenses, "monthly_expenses", self.name)
        if params.expected_return is not None:
            require_number(params.expected_return, "expected_return", self.name)
        if params.inflation_rate is not None:
            require_number(params.inflation_rate, "inflation_rate", self.name)

        if not params.goals:
            raise InvalidParametersError(
                "At least one goal must be provided",
                field="goals", rule="non_empty", value=params.goals, calculator=self.name
            )

        as_of = self._as_of(params)
        seen: set[str] = set()
        for index, goal in enumerate(params.goals):
            if goal.id in seen:
                raise InvalidParametersError(
                    f"Duplicate goal id {goal.id!r}",
                    field=f"goals[{index}].id", rule="unique", value=goal.id, calculator=self.name
                )
            seen.add(goal.id)
            require_positive(goal.target_amount, f"goals[{index}].target_amount", self.name)
            require_non_negative(goal.current_progress, f"goals[{index}].current_progress", self.name)
            try:
                Priority(goal.priority)
            except ValueError as e:
                raise InvalidParametersError(
                    f"Unknown priority {goal.priority!r}",
                    field=f"goals[{index}].priority", rule="enum", value=goal.priority, calculator=self.name
                ) from e
            if not isinstance(goal.target_date, date) or goal.target_date <= as_of:
                raise InvalidParametersError(
                    f"Goal {goal.id!r} target date must be after {as_of.isoformat()}",
                    field=f"goals[{index}].target_date", rule="future_date",
                    value=goal.target_date, calculator=self.name
                )

        constraints = params.budget_constraints
        if constraints is not None and constraints.max_savings_rate is not None:
            rate = constraints.max_savings_rate
            require_positive(rate, "budget_constraints.max_savings_rate", self.name)
            if rate > 1:
                raise InvalidParametersError(
                    f"max_savings_rate must not exceed 1, got {rate}",
                    field="budget_constraints.max_savings_rate", rule="at_most_one",
                    value=rate, calculator=self.name
                )

        if params.income_growth is not None:
            require_number(params.income_growth.annual_growth_rate,
                           "income_growth.annual_growth_rate", self.name)

        if params.preferences is not None:
            try:
                RiskTolerance(params.preferences.risk_tolerance)
            except ValueError as e:
                raise InvalidParametersError(
                    f"Unknown risk tolerance {params.preferences.risk_tolerance!r}",
                    field="preferences.risk_tolerance", rule="enum",
                    value=params.preferences.risk_tolerance, calculator=self.name
                ) from e

    def compute(self, params: SavingsRateParams) -> SavingsRateResult:
        as_of = self._as_of(params)
        preferences = params.preferences or OptimizationPreferences()
        constraints = params.budget_constraints or BudgetConstraints()

        annual_return = (params.expected_return if params.expected_return is not None
                         else RISK_RETURNS[RiskTolerance(preferences.risk_tolerance)])
        inflation = (params.inflation_rate if params.inflation_rate is not None
                     else self.config.savings.inflation_rate)
        max_rate = constraints.max_savings_rate or self.config.savings.max_savings_rate

        monthly_income = params.current_income / 12
        ceiling = monthly_income * max_rate
        monthly_rate = annual_return / 12

        plans = []
        for goal in params.goals:
            months = months_between(as_of, goal.target_date)
            target, required = self._requirement(goal, months, monthly_rate, inflation)
            plans.append(_GoalPlan(
                goal=goal,
                months=months,
                target=target,
                required=required,
                achievability=achievability_score(ceiling, required),
            ))

        plans.sort(key=lambda p: self._sort_key(p, preferences))
        base_months = {p.goal.id: p.months for p in plans}

        total_required = sum(p.required for p in plans)
        if total_required > ceiling and preferences.allow_timeline_adjustments:
            self._extend_flexible_goals(plans, total_required - ceiling, as_of,
                                        monthly_rate, inflation, ceiling)
            total_required = sum(p.required for p in plans)

        remaining_budget = ceiling
        for plan in plans:
            plan.allocated = min(plan.required, remaining_budget)
            remaining_budget -= plan.allocated
        total_allocated = ceiling - remaining_budget

        gap = max(0.0, total_required - ceiling)
        logger.debug("Savings plan allocated", goals=len(plans),
                     total_required=round(total_required, 2), ceiling=round(ceiling, 2), gap=round(gap, 2))

        return SavingsRateResult(
            recommended_savings_rate=total_allocated / monthly_income,
            required_monthly_savings=total_required,
            max_monthly_savings=ceiling,
            current_savings_gap=gap,
            goal_breakdown=tuple(
                GoalAllocation(
                    goal_id=p.goal.id,
                    goal_name=p.goal.name,
                    priority=p.goal.priority,
                    months_to_target=p.months,
                    inflation_adjusted_target=p.target,
                    required_monthly_savings=p.required,
                    allocated_monthly_savings=p.allocated,
                    achievability_score=p.achievability,
                    timeline_adjustment=p.adjustment,
                )
                for p in plans
            ),
            budget_adjustments=self._budget_adjustments(params, constraints, gap),
            income_optimization=tuple(
                IncomeStrategy(strategy=name, potential_income_increase=params.current_income * share,
                               timeframe=timeframe, effort=effort, probability=probability)
                for name, share, timeframe, effort, probability in INCOME_STRATEGIES
            ),
            timeline_analysis=self._timeline(params, plans, as_of),
            scenario_analysis=self._scenarios(plans, base_months, annual_return, inflation,
                                              ceiling, monthly_income),
            milestones=self._milestones(params, plans, as_of, total_allocated),
            feasibility=self._feasibility(gap, ceiling, total_required),
        )

    def _requirement(self, goal: Goal, months: int, monthly_rate: float,
                     inflation: float) -> tuple[float, float]:
        """Inflation-adjusted remaining amount and the monthly payment that reaches it."""
        remaining = max(0.0, goal.target_amount - goal.current_progress)
        if goal.inflation_adjusted:
            remaining *= math.pow(1 + inflation, months / 12)
        if remaining <= 0:
            return remaining, 0.0
        return remaining, required_periodic_payment(remaining, monthly_rate, months)

    def _sort_key(self, plan: _GoalPlan, preferences: OptimizationPreferences) -> tuple:
        priority_rank = Priority(plan.goal.priority).rank if preferences.prioritize_high_priority_goals else 0
        date_rank = plan.goal.target_date.toordinal() if preferences.prefer_earlier_goals else 0
        return (priority_rank, -plan.achievability, date_rank)

    def _extend_flexible_goals(self, plans: list[_GoalPlan], excess: float, as_of: date,
                               monthly_rate: float, inflation: float, ceiling: float) -> None:
        """
        Stretch flexible goals so their combined requirement drops by ``excess``.

        The stretch factor is capped by ``max_timeline_extension``; inflexible
        goals keep their dates.
        """
        flexible = [p for p in plans if p.goal.is_flexible and p.required > 0]
        flexible_total = sum(p.required for p in flexible)
        if flexible_total <= 0:
            return

        max_extension = self.config.savings.max_timeline_extension
        reduced_total = flexible_total - excess
        if reduced_total <= flexible_total / max_extension:
            factor = max_extension
        else:
            factor = flexible_total / reduced_total

        for plan in flexible:
            new_months = int(math.ceil(plan.months * factor))
            target, required = self._requirement(plan.goal, new_months, monthly_rate, inflation)
            plan.adjustment = TimelineAdjustment(
                original_date=plan.goal.target_date,
                adjusted_date=add_months(as_of, new_months),
                reason=(f"Extended by {factor:.2f}x to fit the monthly savings ceiling "
                        f"of {ceiling:,.2f}"),
            )
            plan.months = new_months
            plan.target = target
            plan.required = required
            plan.achievability = achievability_score(ceiling, required)

    def _budget_adjustments(self, params: SavingsRateParams, constraints: BudgetConstraints,
                            gap: float) -> tuple[BudgetAdjustment, ...]:
        """Spending cuts on non-essential categories, easiest first."""
        candidates = [(c.category, c.monthly_amount) for c in params.expense_categories
                      if not c.essential and c.monthly_amount > 0]
        if not candidates and constraints.discretionary_expenses > 0:
            candidates = [("Discretionary", constraints.discretionary_expenses)]

        adjustments = []
        for category, amount in candidates:
            _, share, difficulty = category_savings_rule(category)
            savings = amount * share
            coverage = savings / gap if gap > 0 else 0.0
            if coverage >= 0.5:
                impact = "high"
            elif coverage >= 0.2:
                impact = "medium"
            else:
                impact = "low"
            adjustments.append(BudgetAdjustment(
                category=category,
                current_amount=amount,
                recommended_amount=amount - savings,
                potential_savings=savings,
                difficulty=difficulty,
                impact=impact,
            ))

        adjustments.sort(key=lambda a: (a.difficulty.rank, -a.potential_savings))
        return tuple(adjustments)

    def _income_for_year(self, params: SavingsRateParams, year: int) -> float:
        growth = params.income_growth
        if growth is None:
            return params.current_income
        income = params.current_income * math.pow(1 + growth.annual_growth_rate, year)
        for promotion in growth.promotions:
            if promotion.year <= year:
                income *= 1 + promotion.salary_increase
        return income

    def _timeline(self, params: SavingsRateParams, plans: list[_GoalPlan],
                  as_of: date) -> TimelineAnalysis:
        completions = [add_months(as_of, p.months) for p in plans]
        longest = max(p.months for p in plans)

        rates = []
        for year in range(int(math.ceil(longest / 12))):
            saving = sum(p.allocated for p in plans if p.months > year * 12)
            rates.append(saving * 12 / self._income_for_year(params, year))

        return TimelineAnalysis(
            earliest_goal_completion=min(completions),
            latest_goal_completion=max(completions),
            total_savings_period=longest / 12,
            peak_savings_rate=max(rates) if rates else 0.0,
            average_savings_rate=sum(rates) / len(rates) if rates else 0.0,
        )

    def _scenarios(self, plans: list[_GoalPlan], base_months: dict[str, int], annual_return: float,
                   inflation: float, ceiling: float, monthly_income: float) -> tuple[ScenarioOutcome, ...]:
        variants = (
            ("conservative", max(0.0, annual_return - SCENARIO_RETURN_SHIFT), 1.0,
             ("Lower expected returns require higher monthly savings",
              "Less exposure to market volatility")),
            ("moderate", annual_return, 1.0,
             ("Balanced return assumptions",)),
            ("aggressive", annual_return + SCENARIO_RETURN_SHIFT, 1.0,
             ("Higher expected returns reduce required savings",
              "Greater exposure to market downturns")),
            ("flexible", annual_return, FLEXIBLE_SCENARIO_EXTENSION,
             ("Flexible goals complete later",
              "Lower monthly savings pressure")),
        )

        outcomes = []
        for scenario, annual, extension, tradeoffs in variants:
            requirements = []
            for plan in plans:
                months = base_months[plan.goal.id]
                if plan.goal.is_flexible:
                    months = int(math.ceil(months * extension))
                requirements.append(self._requirement(plan.goal, months, annual / 12, inflation)[1])

            budget = ceiling
            funded = 0
            for required in requirements:
                allocated = min(required, budget)
                budget -= allocated
                if allocated >= required:
                    funded += 1

            outcomes.append(ScenarioOutcome(
                scenario=scenario,
                required_savings_rate=sum(requirements) / monthly_income,
                goal_achievement_rate=funded / len(requirements) * 100,
                tradeoffs=tradeoffs,
            ))
        return tuple(outcomes)

    def _milestones(self, params: SavingsRateParams, plans: list[_GoalPlan], as_of: date,
                    total_allocated: float) -> tuple[Milestone, ...]:
        interval = self.config.savings.milestone_interval_months
        horizon = self.config.savings.milestone_months

        milestones = []
        for month in range(interval, horizon + 1, interval):
            milestones.append(Milestone(
                date=add_months(as_of, month),
                description=f"Month {month} savings checkpoint",
                target_savings=params.current_savings + total_allocated * month,
                goal_progress=tuple(
                    GoalProgress(
                        goal_id=p.goal.id,
                        progress_percent=min(
                            100.0,
                            (p.goal.current_progress + p.allocated * month) / p.goal.target_amount * 100,
                        ),
                    )
                    for p in plans
                ),
            ))
        return tuple(milestones)

    def _feasibility(self, gap: float, ceiling: float, total_required: float) -> Feasibility:
        if gap <= 0:
            return Feasibility.ACHIEVABLE
        if ceiling >= total_required * CHALLENGING_COVERAGE:
            return Feasibility.CHALLENGING
        return Feasibility.UNREALISTIC
