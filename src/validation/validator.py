"""
Add-Expense Form Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - INPUT VALIDATION:
- All three fields present
- Amount parses as a non-negative number
- Date parses as a calendar date
- These are errors: the expense is not added

STAGE 2 - SANITY CHECKS:
- Date far in the future
- Absurdly large amount
- Zero amount
- These are warnings: the expense is added, the user is told

IMPORTANT: Validation NEVER silently fixes issues.
Whitespace is trimmed, nothing else is changed.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from src.config import AppSettings, get_settings
from src.models.expense import ValidationIssue, ValidationResult, round_to_cents


AmountInput = Union[str, int, float, Decimal, None]
DateInput = Union[str, date, None]


class ExpenseValidator:
    """
    Validates raw add-expense form input.

    Stage 1 failures block the add; stage 2 only warns.
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or get_settings().app

    def _parse_amount(self, value: AmountInput) -> Optional[Decimal]:
        """Parse an amount, or None if it is not a finite number."""
        if value is None or isinstance(value, bool):
            return None
        try:
            amount = Decimal(str(value).strip())
            if not amount.is_finite():
                return None
            return round_to_cents(amount)
        except (InvalidOperation, ValueError):
            return None

    def _parse_date(self, value: DateInput) -> Optional[date]:
        """Parse a date, or None if it is not a calendar date."""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            # ISO first, that is what the date picker sends
            for fmt in ["%Y-%m-%d", "%d-%m-%Y", "%d/%m/%Y"]:
                try:
                    return datetime.strptime(value.strip(), fmt).date()
                except ValueError:
                    continue
        return None

    @staticmethod
    def _is_blank(value) -> bool:
        return value is None or (isinstance(value, str) and not value.strip())

    def _validate_input(
        self,
        description: Optional[str],
        amount: AmountInput,
        expense_date: DateInput,
    ) -> tuple[list[ValidationIssue], Optional[Decimal], Optional[date]]:
        """
        Stage 1: Input validation.

        Returns: (issues, parsed_amount, parsed_date)
        """
        issues = []
        parsed_amount = None
        parsed_date = None

        if self._is_blank(description):
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
                severity="error",
                suggested_fix="Say what the money was spent on",
            ))
        elif len(description.strip()) > 200:
            issues.append(ValidationIssue(
                field="description",
                issue_type="too_long",
                message="Description must be at most 200 characters",
                severity="error",
            ))

        if self._is_blank(amount):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
            ))
        else:
            parsed_amount = self._parse_amount(amount)
            if parsed_amount is None:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_format",
                    message=f"Amount ({amount}) is not a number",
                    severity="error",
                    suggested_fix="Enter digits only, e.g. 50 or 49.99",
                ))
            elif parsed_amount < 0:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="Amount cannot be negative",
                    severity="error",
                ))
                parsed_amount = None

        if self._is_blank(expense_date):
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required",
                severity="error",
            ))
        else:
            parsed_date = self._parse_date(expense_date)
            if parsed_date is None:
                issues.append(ValidationIssue(
                    field="date",
                    issue_type="invalid_format",
                    message=f"Date ({expense_date}) is not a valid date",
                    severity="error",
                    suggested_fix="Use the YYYY-MM-DD format",
                ))

        return issues, parsed_amount, parsed_date

    def _validate_sanity(
        self,
        amount: Decimal,
        expense_date: date,
    ) -> list[ValidationIssue]:
        """
        Stage 2: Sanity checks on parsed values.

        Everything here is a warning.
        """
        issues = []
        today = date.today()
        symbol = self._settings.currency_symbol

        max_future_date = today + timedelta(days=self._settings.future_date_tolerance_days)
        if expense_date > max_future_date:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({expense_date}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        max_amount = Decimal(str(self._settings.max_expense_amount))
        if amount > max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({symbol}{amount:,.2f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))
        elif amount == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message="Amount is zero",
                severity="warning",
            ))

        return issues

    def validate(
        self,
        description: Optional[str],
        amount: AmountInput,
        expense_date: DateInput,
    ) -> ValidationResult:
        """
        Run both validation stages on raw form input.

        Returns:
            ValidationResult; when valid it carries the parsed values
        """
        issues, parsed_amount, parsed_date = self._validate_input(
            description, amount, expense_date
        )

        is_valid = not any(issue.severity == "error" for issue in issues)

        # Only sanity-check values that parsed
        if is_valid:
            issues.extend(self._validate_sanity(parsed_amount, parsed_date))

        warnings = [issue.message for issue in issues if issue.severity == "warning"]

        if not is_valid:
            return ValidationResult(is_valid=False, issues=issues, warnings=warnings)

        return ValidationResult(
            is_valid=True,
            issues=issues,
            warnings=warnings,
            description=description.strip(),
            amount=parsed_amount,
            expense_date=parsed_date,
        )

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Generate a user-friendly summary of validation results.
        """
        if result.is_valid and not result.warnings:
            return "✅ Expense added."

        lines = []

        if result.has_errors:
            lines.append("❌ The expense could not be added:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
