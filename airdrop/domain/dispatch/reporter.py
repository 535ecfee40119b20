"""
Outcome reporting
"""
from dataclasses import dataclass

from .models import DispatchOutcome


@dataclass(frozen=True)
class Report:
    """Summary line and process exit code"""
    summary: str
    exit_code: int


def format_summary(success_count: int, failure_count: int) -> str:
    return f"Sharing completed: {success_count} successful, {failure_count} failed"


def report(outcome: DispatchOutcome) -> Report:
    """
    Turn a dispatch outcome into a summary and exit code.
    
    The exit code is 0 only when nothing failed, whatever the success count.
    """
    return Report(
        summary=format_summary(outcome.success_count, outcome.failure_count),
        exit_code=outcome.exit_code,
    )
