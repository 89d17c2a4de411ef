"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration overrides section by section."""

    @staticmethod
    def validate_cache_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate cache parameters."""
        errors = []

        if "ttl_seconds" in params:
            value = params["ttl_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="cache.ttl_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "max_entries" in params:
            value = params["max_entries"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="cache.max_entries",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_performance_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate performance recorder parameters."""
        errors = []

        if "max_samples" in params:
            value = params["max_samples"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="performance.max_samples",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_monte_carlo_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate Monte Carlo defaults."""
        errors = []

        if "iterations" in params:
            value = params["iterations"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="monte_carlo.iterations",
                    message="Must be a positive integer",
                    value=value
                ))

        if "inflation_rate" in params:
            value = params["inflation_rate"]
            if not _is_number(value) or value < 0 or value > 1:
                errors.append(ValidationError(
                    field="monte_carlo.inflation_rate",
                    message="Must be a number between 0 and 1",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_fire_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate FIRE policy constants."""
        errors = []

        for name in ("withdrawal_rate", "minimum_stress_withdrawal_rate"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0 or value > 1:
                    errors.append(ValidationError(
                        field=f"fire.{name}",
                        message="Must be a positive number between 0 and 1",
                        value=value
                    ))

        for name in ("social_security_discount_rate", "healthcare_inflation_rate"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=f"fire.{name}",
                        message="Must be a non-negative number",
                        value=value
                    ))

        for name in ("coverage_gap_years", "social_security_retirement_age"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"fire.{name}",
                        message="Must be a positive integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_debt_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate debt simulation parameters."""
        errors = []

        for name in ("max_months", "consolidation_term_months"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"debt.{name}",
                        message="Must be a positive integer",
                        value=value
                    ))

        if "consolidation_rate" in params:
            value = params["consolidation_rate"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="debt.consolidation_rate",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_savings_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate savings allocation parameters."""
        errors = []

        if "max_savings_rate" in params:
            value = params["max_savings_rate"]
            if not _is_number(value) or value <= 0 or value > 1:
                errors.append(ValidationError(
                    field="savings.max_savings_rate",
                    message="Must be a positive number between 0 and 1",
                    value=value
                ))

        if "inflation_rate" in params:
            value = params["inflation_rate"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="savings.inflation_rate",
                    message="Must be a non-negative number",
                    value=value
                ))

        for name in ("milestone_months", "milestone_interval_months"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"savings.{name}",
                        message="Must be a positive integer",
                        value=value
                    ))

        if "max_timeline_extension" in params:
            value = params["max_timeline_extension"]
            if not _is_number(value) or value < 1:
                errors.append(ValidationError(
                    field="savings.max_timeline_extension",
                    message="Must be a number of at least 1",
                    value=value
                ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate a full configuration dictionary."""
        validators = {
            "cache": cls.validate_cache_params,
            "performance": cls.validate_performance_params,
            "monte_carlo": cls.validate_monte_carlo_params,
            "fire": cls.validate_fire_params,
            "debt": cls.validate_debt_params,
            "savings": cls.validate_savings_params,
        }

        errors = []
        for section, section_config in config.items():
            if section not in validators:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=section_config
                ))
                continue
            if not isinstance(section_config, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Section must be a mapping",
                    value=section_config
                ))
                continue
            errors.extend(validators[section](section_config))

        return errors
