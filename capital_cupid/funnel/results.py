"""Outcome of a user action, as seen by the view layer."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Route:
    ACCOUNT = "account"
    ONBOARDING = "onboarding"
    SWIPE = "swipe"
    SHORTLIST = "shortlist"
    APPLY = "apply"
    SUBMITTED = "submitted"


class ActionResult(BaseModel):
    """Success flag plus whatever the view needs to render the outcome.

    `errors` maps form fields (or "general") to inline messages; `retryable`
    marks transient failures the user can re-trigger.
    """

    success: bool
    message: str = ""
    errors: Dict[str, str] = Field(default_factory=dict)
    retryable: bool = False
    redirect_to: Optional[str] = None
    data: Any = None

    @classmethod
    def ok(cls, message: str = "", **kwargs) -> "ActionResult":
        return cls(success=True, message=message, **kwargs)

    @classmethod
    def failed(cls, message: str, retryable: bool = False, **kwargs) -> "ActionResult":
        return cls(success=False, message=message, retryable=retryable, **kwargs)
