"""
Debt payoff planner.

Simulates month by month over a private working copy of the debts. The
strategy fixes the order once up front; the first remaining debt in that
order is the focus debt and receives the extra-payment pool. Minimum
payments of debts paid off in a month join the pool from the next month.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional

import structlog

from ..errors import DebtNeverAmortizesError, InvalidParametersError
from ..models.debt import (
    ConsolidationAnalysis,
    CreditScorePoint,
    DebtAccount,
    DebtPayoffParams,
    DebtPayoffResult,
    DebtStrategy,
    DebtToIncomeAnalysis,
    DebtToIncomeRating,
    EmergencyFundTradeoff,
    FinancialContext,
    FireIntegration,
    PayoffOrderEntry,
    ScheduleRow,
    StrategyComparison,
    StrategyOutcome,
)
from ..utils.numeric import future_value_of_annuity, loan_payment, periods_to_target
from .base import (
    BaseCalculator,
    require_finite,
    require_non_negative,
    require_positive,
    require_positive_int,
)

logger = structlog.get_logger(__name__)

# Balances within this of zero count as paid off
PAID_OFF_EPSILON = 1e-9

DTI_BENCHMARKS = (
    (10.0, DebtToIncomeRating.EXCELLENT),
    (20.0, DebtToIncomeRating.GOOD),
    (36.0, DebtToIncomeRating.FAIR),
    (50.0, DebtToIncomeRating.POOR),
)

DEFAULT_CREDIT_SCORE = 650
MIN_CREDIT_SCORE = 300
MAX_CREDIT_SCORE = 850
UTILIZATION_SCORE_WEIGHT = 150
EMERGENCY_FUND_MONTHS = 6
HIGH_INTEREST_RATE = 0.15
FIRE_INVESTMENT_MONTHS = 120


@dataclass
class _WorkingDebt:
    """Mutable simulation state for one debt."""
    account: DebtAccount
    balance: float
    interest_paid: float = 0.0


@dataclass(frozen=True)
class SimulationOutcome:
    schedule: tuple[ScheduleRow, ...]
    debt_order: tuple[PayoffOrderEntry, ...]
    total_interest: float
    total_months: int


def order_debts(debts: tuple[DebtAccount, ...], strategy: DebtStrategy,
                custom_order: tuple[str, ...] = ()) -> list[DebtAccount]:
    """Fix the payoff order for a strategy; ties keep input order."""
    if strategy == DebtStrategy.SNOWBALL:
        return sorted(debts, key=lambda d: d.balance)
    if strategy == DebtStrategy.AVALANCHE:
        return sorted(debts, key=lambda d: d.annual_interest_rate, reverse=True)

    by_id = {d.id: d for d in debts}
    ordered = [by_id[debt_id] for debt_id in custom_order]
    listed = set(custom_order)
    ordered.extend(d for d in debts if d.id not in listed)
    return ordered


def simulate_payoff(ordered: list[DebtAccount], extra_payment: float,
                    max_months: int) -> SimulationOutcome:
    """
    Run the month loop until every balance reaches zero.

    Raises:
        DebtNeverAmortizesError: when balances remain after ``max_months``
    """
    remaining = [_WorkingDebt(account=d, balance=d.balance) for d in ordered]
    schedule: list[ScheduleRow] = []
    payoff: list[_WorkingDebt] = []
    payoff_months: dict[str, int] = {}
    pool = extra_payment
    total_interest = 0.0
    month = 0

    while remaining:
        if month >= max_months:
            unpaid = [d.account.id for d in remaining]
            raise DebtNeverAmortizesError(
                f"Debts {unpaid} still outstanding after {max_months} months",
                debt_ids=unpaid, months_simulated=month, calculator=DebtPayoffPlanner.name
            )
        month += 1
        freed = 0.0

        for index, debt in enumerate(remaining):
            account = debt.account
            interest = debt.balance * account.annual_interest_rate / 12
            principal = min(account.minimum_payment - interest, debt.balance)

            if index == 0 and pool > 0:
                principal += min(pool, debt.balance - principal)

            debt.balance -= principal
            debt.interest_paid += interest
            total_interest += interest

            is_paid_off = debt.balance <= PAID_OFF_EPSILON
            if is_paid_off:
                debt.balance = 0.0

            schedule.append(ScheduleRow(
                month=month,
                debt_id=account.id,
                debt_name=account.name,
                payment=interest + principal,
                principal_payment=principal,
                interest_payment=interest,
                remaining_balance=max(0.0, debt.balance),
                is_paid_off=is_paid_off,
            ))

            if is_paid_off:
                payoff.append(debt)
                payoff_months[account.id] = month
                freed += account.minimum_payment

        remaining = [d for d in remaining if d.balance > 0]
        pool += freed

    debt_order = tuple(
        PayoffOrderEntry(
            debt_id=d.account.id,
            debt_name=d.account.name,
            order=position,
            payoff_month=payoff_months[d.account.id],
            total_interest=d.interest_paid,
        )
        for position, d in enumerate(payoff, start=1)
    )

    return SimulationOutcome(
        schedule=tuple(schedule),
        debt_order=debt_order,
        total_interest=total_interest,
        total_months=month,
    )


def rate_debt_to_income(ratio_percent: float) -> DebtToIncomeRating:
    for limit, rating in DTI_BENCHMARKS:
        if ratio_percent <= limit:
            return rating
    return DebtToIncomeRating.DANGEROUS


class DebtPayoffPlanner(BaseCalculator[DebtPayoffParams, DebtPayoffResult]):
    """Snowball, avalanche or custom payoff schedules with extended analyses."""

    name = "debt_payoff"

    def validate(self, params: DebtPayoffParams) -> None:
        if not params.debts:
            raise InvalidParametersError(
                "At least one debt must be provided",
                field="debts", rule="non_empty", value=params.debts, calculator=self.name
            )

        seen: set[str] = set()
        for index, debt in enumerate(params.debts):
            if debt.id in seen:
                raise InvalidParametersError(
                    f"Duplicate debt id {debt.id!r}",
                    field=f"debts[{index}].id", rule="unique", value=debt.id, calculator=self.name
                )
            seen.add(debt.id)
            require_non_negative(debt.balance, f"debts[{index}].balance", self.name)
            require_non_negative(debt.annual_interest_rate, f"debts[{index}].annual_interest_rate", self.name)
            require_non_negative(debt.minimum_payment, f"debts[{index}].minimum_payment", self.name)
            if debt.credit_limit is not None:
                require_positive(debt.credit_limit, f"debts[{index}].credit_limit", self.name)

        require_non_negative(params.extra_payment, "extra_payment", self.name)

        try:
            strategy = DebtStrategy(params.strategy)
        except ValueError as e:
            raise InvalidParametersError(
                f"Unknown strategy {params.strategy!r}",
                field="strategy", rule="enum", value=params.strategy, calculator=self.name
            ) from e

        if strategy == DebtStrategy.CUSTOM:
            unknown = [debt_id for debt_id in params.custom_order if debt_id not in seen]
            if unknown:
                raise InvalidParametersError(
                    f"custom_order references unknown debt ids {unknown}",
                    field="custom_order", rule="known_ids", value=unknown, calculator=self.name
                )
            if len(set(params.custom_order)) != len(params.custom_order):
                raise InvalidParametersError(
                    "custom_order lists a debt more than once",
                    field="custom_order", rule="unique", value=params.custom_order, calculator=self.name
                )

        if params.financial_context is not None:
            self._validate_context(params.financial_context)

    def _validate_context(self, context: FinancialContext) -> None:
        require_positive(context.monthly_income, "financial_context.monthly_income", self.name)
        require_non_negative(context.monthly_expenses, "financial_context.monthly_expenses", self.name)
        require_non_negative(context.emergency_fund, "financial_context.emergency_fund", self.name)
        if context.consolidation_rate is not None:
            require_non_negative(context.consolidation_rate, "financial_context.consolidation_rate", self.name)
        if context.consolidation_term_months is not None:
            require_positive_int(context.consolidation_term_months,
                                 "financial_context.consolidation_term_months", self.name)
        score = context.current_credit_score
        if score is not None and not MIN_CREDIT_SCORE <= score <= MAX_CREDIT_SCORE:
            raise InvalidParametersError(
                f"current_credit_score must be between {MIN_CREDIT_SCORE} and {MAX_CREDIT_SCORE}",
                field="financial_context.current_credit_score", rule="range",
                value=score, calculator=self.name
            )

    def compute(self, params: DebtPayoffParams) -> DebtPayoffResult:
        strategy = DebtStrategy(params.strategy)
        max_months = self.config.debt.max_months

        ordered = order_debts(params.debts, strategy, params.custom_order)
        outcome = simulate_payoff(ordered, params.extra_payment, max_months)
        require_finite(outcome.total_interest, "total_interest", self.name)

        comparison = self._compare_strategies(params, strategy, outcome, max_months)

        result = DebtPayoffResult(
            strategy=strategy,
            total_interest=outcome.total_interest,
            total_months=outcome.total_months,
            monthly_savings=params.extra_payment,
            payoff_schedule=outcome.schedule,
            debt_order=outcome.debt_order,
            comparison=comparison,
        )

        context = params.financial_context
        if context is None:
            return result

        logger.debug("Running extended debt analyses", debts=len(params.debts))
        return replace(
            result,
            consolidation=self._consolidation(params, outcome, context),
            debt_to_income=self._debt_to_income(params, context),
            credit_score_projection=self._credit_score_projection(params, outcome, context),
            fire_integration=self._fire_integration(params, outcome, context),
            emergency_fund=self._emergency_fund(params, context),
        )

    def _compare_strategies(self, params: DebtPayoffParams, strategy: DebtStrategy,
                            outcome: SimulationOutcome, max_months: int) -> StrategyComparison:
        outcomes = {}
        for candidate in (DebtStrategy.SNOWBALL, DebtStrategy.AVALANCHE):
            if candidate == strategy:
                run = outcome
            else:
                try:
                    run = simulate_payoff(order_debts(params.debts, candidate),
                                          params.extra_payment, max_months)
                except DebtNeverAmortizesError as e:
                    logger.info("Comparison strategy never pays off",
                                strategy=candidate.value, debt_ids=e.debt_ids)
                    outcomes[candidate] = StrategyOutcome(total_interest=None, total_months=None,
                                                          completed=False)
                    continue
            outcomes[candidate] = StrategyOutcome(total_interest=run.total_interest,
                                                  total_months=run.total_months)

        snowball = outcomes[DebtStrategy.SNOWBALL]
        avalanche = outcomes[DebtStrategy.AVALANCHE]
        if not (snowball.completed and avalanche.completed):
            return StrategyComparison(snowball=snowball, avalanche=avalanche,
                                      interest_savings=None, time_savings=None)
        return StrategyComparison(
            snowball=snowball,
            avalanche=avalanche,
            interest_savings=snowball.total_interest - avalanche.total_interest,
            time_savings=snowball.total_months - avalanche.total_months,
        )

    def _consolidation(self, params: DebtPayoffParams, outcome: SimulationOutcome,
                       context: FinancialContext) -> Optional[ConsolidationAnalysis]:
        loan_amount = sum(d.balance for d in params.debts)
        if loan_amount <= 0:
            return None

        rate = (context.consolidation_rate if context.consolidation_rate is not None
                else self.config.debt.consolidation_rate)
        term = context.consolidation_term_months or self.config.debt.consolidation_term_months

        monthly_payment = loan_payment(loan_amount, rate / 12, term)
        total_interest = monthly_payment * term - loan_amount
        savings = outcome.total_interest - total_interest
        budget = sum(d.minimum_payment for d in params.debts) + params.extra_payment

        return ConsolidationAnalysis(
            loan_amount=loan_amount,
            interest_rate=rate,
            term_months=term,
            monthly_payment=monthly_payment,
            total_interest=total_interest,
            interest_savings=savings,
            recommended=savings > 0 and monthly_payment <= budget,
        )

    def _debt_to_income(self, params: DebtPayoffParams,
                        context: FinancialContext) -> DebtToIncomeAnalysis:
        payments = sum(d.minimum_payment for d in params.debts)
        ratio = payments / context.monthly_income * 100
        return DebtToIncomeAnalysis(
            monthly_debt_payments=payments,
            monthly_income=context.monthly_income,
            ratio_percent=ratio,
            rating=rate_debt_to_income(ratio),
        )

    def _credit_score_projection(self, params: DebtPayoffParams, outcome: SimulationOutcome,
                                 context: FinancialContext) -> tuple[CreditScorePoint, ...]:
        """Year-end score estimates driven by revolving utilization."""
        revolving = {d.id: d.credit_limit for d in params.debts if d.credit_limit is not None}
        if revolving:
            tracked = set(revolving)
            denominator = sum(revolving.values())
        else:
            tracked = {d.id for d in params.debts}
            denominator = sum(d.balance for d in params.debts)
        if denominator <= 0:
            return ()

        balances = {d.id: d.balance for d in params.debts}
        initial_utilization = sum(balances[i] for i in tracked) / denominator
        base_score = context.current_credit_score or DEFAULT_CREDIT_SCORE

        years = math.ceil(outcome.total_months / 12)
        rows = iter(outcome.schedule)
        row = next(rows, None)
        points = []
        for year in range(1, years + 1):
            month_end = min(year * 12, outcome.total_months)
            while row is not None and row.month <= month_end:
                balances[row.debt_id] = row.remaining_balance
                row = next(rows, None)

            tracked_balance = sum(balances[i] for i in tracked)
            utilization = tracked_balance / denominator
            score = base_score + round((initial_utilization - utilization) * UTILIZATION_SCORE_WEIGHT)
            points.append(CreditScorePoint(
                year=year,
                remaining_balance=sum(balances.values()),
                utilization_percent=utilization * 100,
                estimated_score=int(min(MAX_CREDIT_SCORE, max(MIN_CREDIT_SCORE, score))),
            ))
        return tuple(points)

    def _fire_integration(self, params: DebtPayoffParams, outcome: SimulationOutcome,
                          context: FinancialContext) -> FireIntegration:
        freed = sum(d.minimum_payment for d in params.debts) + params.extra_payment
        invested = future_value_of_annuity(freed, context.expected_return / 12, FIRE_INVESTMENT_MONTHS)
        return FireIntegration(
            freed_monthly_cash_flow=freed,
            debt_free_month=outcome.total_months,
            invested_value_after_10_years=invested,
            annual_passive_income=invested * self.config.fire.withdrawal_rate,
        )

    def _emergency_fund(self, params: DebtPayoffParams,
                        context: FinancialContext) -> EmergencyFundTradeoff:
        recommended = context.monthly_expenses * EMERGENCY_FUND_MONTHS
        shortfall = max(0.0, recommended - context.emergency_fund)

        if shortfall == 0:
            months_to_build = 0.0
            advice = "Emergency fund is fully funded; direct extra cash flow to debt payoff"
        else:
            months_to_build = periods_to_target(context.emergency_fund, params.extra_payment, recommended, 0.0)
            if max(d.annual_interest_rate for d in params.debts) >= HIGH_INTEREST_RATE:
                advice = "Keep a starter emergency fund and focus extra payments on high-interest debt"
            else:
                advice = "Build the emergency fund before accelerating debt payments"

        return EmergencyFundTradeoff(
            current_emergency_fund=context.emergency_fund,
            recommended_emergency_fund=recommended,
            shortfall=shortfall,
            months_to_build=months_to_build,
            recommendation=advice,
        )
