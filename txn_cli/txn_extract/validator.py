"""Post-parse sanity checks for parsed transactions.

The parser accepts any values the statement text carries; the validator
flags results that deserve a second look before they are stored:

* negative running balances, which none of the supported layouts print
* zero amounts
* consecutive transactions whose balances do not reconcile
  (``previous.balance + current.amount != current.balance``)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .types import ParsedTransaction, format_money


@dataclass(slots=True)
class ValidationIssue:
    """Single validation finding."""

    code: str
    message: str
    severity: str = "error"  # "error" | "warning"


@dataclass(slots=True)
class ValidationReport:
    """Aggregate report returned by ``validate_transactions``."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no error-level issues were recorded."""

        return all(issue.severity != "error" for issue in self.issues)

    def add(self, code: str, message: str, *, severity: str = "error") -> None:
        self.issues.append(ValidationIssue(code=code, message=message, severity=severity))


def validate_transactions(transactions: Sequence[ParsedTransaction]) -> ValidationReport:
    """Validate parsed transactions in statement order."""

    report = ValidationReport()

    if not transactions:
        report.add("no_transactions", "No transactions were parsed.", severity="warning")
        return report

    for txn in transactions:
        label = f"'{txn.description}' on {txn.date.isoformat()}"
        if txn.balance < 0:
            report.add(
                "negative_balance",
                f"Transaction {label} reports a negative balance ({format_money(txn.balance)}).",
                severity="warning",
            )
        if txn.amount == 0:
            report.add(
                "zero_amount",
                f"Transaction {label} has a zero amount.",
                severity="warning",
            )

    _validate_running_balance(transactions, report)
    return report


def _validate_running_balance(
    transactions: Sequence[ParsedTransaction], report: ValidationReport
) -> None:
    for previous, current in zip(transactions, transactions[1:]):
        expected = previous.balance + current.amount
        if expected != current.balance:
            report.add(
                "balance_mismatch",
                f"Balance after '{current.description}' is {format_money(current.balance)}, "
                f"expected {format_money(expected)} from the previous balance "
                f"{format_money(previous.balance)}.",
                severity="warning",
            )
