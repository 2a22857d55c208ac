"""
Account Refresh

Opens the account statement view of a multi-frame banking interface by
waiting for elements across frames with Playwright.
"""

from account_refresh.errors import (
    AccessDeniedError,
    AutomationError,
    NotFoundError,
    WaitCancelledError,
)
from account_refresh.models import FrameContext, PipelineReport, ProbeResult, ProbeStatus, WaitOutcome
from account_refresh.predicates import (
    AnchorTextPredicate,
    ElementPredicate,
    SelectorPredicate,
    anchor_with_text,
    element_with_id,
    submit_input_named,
)
from account_refresh.waiter import find
from account_refresh.pipeline import Stage, build_statement_stages, refresh_account_statement, run_stages

__version__ = "0.1.0"

__all__ = [
    "AccessDeniedError",
    "AutomationError",
    "NotFoundError",
    "WaitCancelledError",
    "FrameContext",
    "PipelineReport",
    "ProbeResult",
    "ProbeStatus",
    "WaitOutcome",
    "AnchorTextPredicate",
    "ElementPredicate",
    "SelectorPredicate",
    "anchor_with_text",
    "element_with_id",
    "submit_input_named",
    "find",
    "Stage",
    "build_statement_stages",
    "refresh_account_statement",
    "run_stages",
]
