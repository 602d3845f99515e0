"""Page-level controller for the account → onboarding → swipe → apply funnel.

Every public action returns an ActionResult. Failures are recovered here,
at the boundary: nothing raised by the stores or the backend escapes.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from ..accounts import AccountStore, InvalidAccountError, new_account, validate_account_form
from ..api import DraftsApi, GrantsApi
from ..catalog import GrantNotFoundError
from ..deck import DeckState, DeckTracker
from ..drafts import DraftStore, SuggestionKind, apply_suggestion, generate_draft
from ..models import Draft, Grant, Preferences, SMEProfile, Verdict
from ..profile import ONBOARDING_STEPS, ProfileStore, validate_step
from ..storage import StorageError
from .results import ActionResult, Route
from .shortlist import filter_grants, summarize_funding

logger = logging.getLogger(__name__)

NO_MATCHES_MESSAGE = "No matching grants found. Try updating your profile preferences."
SHORTLIST_FAILED_MESSAGE = "Failed to load your shortlisted grants. Please try again."


def field_errors(model: Type[BaseModel], exc: ValidationError) -> Dict[str, str]:
    """Map validation errors to messages keyed by field name, not alias."""
    names = {field.alias or name: name for name, field in model.model_fields.items()}
    return {names.get(str(err["loc"][0]), str(err["loc"][0])): err["msg"] for err in exc.errors() if err["loc"]}


class FunnelSession:
    """Composes the injected stores and backend for one user session."""

    def __init__(
        self,
        accounts: AccountStore,
        profiles: ProfileStore,
        deck: DeckTracker,
        drafts: DraftStore,
        grants_api: GrantsApi,
        drafts_api: Optional[DraftsApi] = None,
    ):
        self.accounts = accounts
        self.profiles = profiles
        self.deck = deck
        self.drafts = drafts
        self.grants_api = grants_api
        self.drafts_api = drafts_api

    # ------------------------------------------------------------------
    # Account
    # ------------------------------------------------------------------

    def create_account(self, business_name: str, email: Optional[str] = None) -> ActionResult:
        errors = validate_account_form(business_name, email)
        if errors:
            return ActionResult.failed("Please fix the highlighted fields", errors=errors)

        account = new_account(business_name, email)
        try:
            self.accounts.save_account(account)
        except (InvalidAccountError, StorageError) as exc:
            logger.error("Error creating account: %s", exc)
            return ActionResult.failed(
                "Failed to create account. Please try again.",
                retryable=True,
                errors={"general": "Failed to create account. Please try again."},
            )

        logger.info("account_created id=%s", account.id)
        return ActionResult.ok("Account created", redirect_to=Route.ONBOARDING, data=account)

    def save_preferences(self, **fields) -> ActionResult:
        try:
            preferences = Preferences.model_validate(
                {"created_at": datetime.now(timezone.utc), **fields}
            )
        except ValidationError as exc:
            return ActionResult.failed("Please fix the highlighted fields", errors=field_errors(Preferences, exc))

        try:
            self.accounts.save_preferences(preferences)
        except (InvalidAccountError, StorageError) as exc:
            logger.error("Error saving preferences: %s", exc)
            return ActionResult.failed("Failed to save preferences. Please try again.", retryable=True)
        return ActionResult.ok("Preferences saved", data=preferences)

    # ------------------------------------------------------------------
    # Onboarding
    # ------------------------------------------------------------------

    def submit_onboarding_step(self, step: int, **answers) -> ActionResult:
        """Save the answers of one questionnaire step (0-based)."""
        try:
            candidate = SMEProfile.model_validate({**self.profiles.profile.model_dump(), **answers})
            errors = validate_step(step, candidate)
        except ValueError as exc:
            return ActionResult.failed(str(exc), errors={"general": str(exc)})
        if errors:
            return ActionResult.failed("Please complete this step", errors=errors)

        try:
            self.profiles.update_step(**answers)
        except StorageError as exc:
            logger.error("Error saving onboarding step %d: %s", step, exc)
            return ActionResult.failed("Failed to save your answers. Please try again.", retryable=True)

        next_step = min(step + 1, len(ONBOARDING_STEPS) - 1)
        return ActionResult.ok(data=next_step)

    async def complete_onboarding(self, **answers) -> ActionResult:
        """Mark the profile complete and deal a fresh deck for it."""
        result = self.submit_onboarding_step(len(ONBOARDING_STEPS) - 1, **answers)
        if not result.success:
            return result
        try:
            self.profiles.set_profile(is_complete=True)
        except StorageError as exc:
            logger.error("Error completing onboarding: %s", exc)
            return ActionResult.failed("Failed to save your profile. Please try again.", retryable=True)

        # A profile edit invalidates the current deck
        return await self.load_deck(refresh=True)

    # ------------------------------------------------------------------
    # Deck
    # ------------------------------------------------------------------

    async def load_deck(self, refresh: bool = False) -> ActionResult:
        profile = self.profiles.profile
        if not profile.is_complete:
            return ActionResult.failed("Complete onboarding first", redirect_to=Route.ONBOARDING)

        if not refresh and self.deck.state is not DeckState.LOADING:
            return self._deck_result()

        try:
            response = await self.grants_api.match(profile)
        except Exception as exc:
            logger.error("Failed to load matches: %s", exc, exc_info=True)
            return ActionResult.failed("Failed to load grant matches. Please try again.", retryable=True)

        self.deck.set_candidates(response.grants)
        if not response.grants:
            return ActionResult.failed(NO_MATCHES_MESSAGE)
        return self._deck_result()

    def swipe(self, verdict: Verdict) -> ActionResult:
        """Decide on the current card."""
        try:
            verdict = Verdict(verdict)
        except ValueError:
            return ActionResult.failed(f"Unknown verdict: {verdict}")

        current = self.deck.current_grant
        if current is None:
            return self._deck_result()

        decision = self.deck.record_swipe(current.id, verdict)
        message = ""
        if decision.verdict is Verdict.ACCEPT:
            message = "Added to shortlist! Grant saved to your shortlist for later review."

        result = self._deck_result()
        result.message = message or result.message
        return result

    def _deck_result(self) -> ActionResult:
        if self.deck.state is DeckState.EXHAUSTED:
            return ActionResult.ok(
                "No more grants to review",
                redirect_to=Route.SHORTLIST,
                data=None,
            )
        return ActionResult.ok(data=self.deck.current_grant)

    def start_over(self) -> ActionResult:
        self.deck.reset()
        return ActionResult.ok("Deck cleared", redirect_to=Route.SWIPE)

    # ------------------------------------------------------------------
    # Shortlist and detail
    # ------------------------------------------------------------------

    async def shortlist(self, search: str = "") -> ActionResult:
        """Shortlisted grants, in shortlist order, narrowed by `search`.

        Grants dealt in the current deck are used as-is; the rest are looked
        up in the catalog, and ids known to neither are skipped. When that
        lookup fails the grants already at hand are still returned, marked
        as a retryable failure.
        """
        ids = self.deck.shortlist_ids
        found = {grant.id: grant for grant in map(self.deck.find_grant, ids) if grant}
        missing = [grant_id for grant_id in ids if grant_id not in found]
        failed = False
        if missing:
            try:
                for grant in await self.grants_api.get_shortlist(missing):
                    found[grant.id] = grant
            except Exception as exc:
                logger.error("Failed to load shortlist grants: %s", exc)
                failed = True

        grants = filter_grants((found[grant_id] for grant_id in ids if grant_id in found), search)
        if failed:
            return ActionResult.failed(SHORTLIST_FAILED_MESSAGE, retryable=True, data=grants)
        return ActionResult.ok(data=grants)

    async def funding_summary(self) -> ActionResult:
        """Total potential funding and application progress for the shortlist."""
        result = await self.shortlist()
        if not result.success:
            return result
        summary = summarize_funding(result.data)
        logger.info("funding_summary grants=%d total=%d", summary.grant_count, summary.total_funding)
        return ActionResult.ok(data=summary)

    async def open_grant(self, grant_id: str) -> ActionResult:
        grant = await self._resolve_grant(grant_id)
        if grant is None:
            return ActionResult.failed(
                "Failed to load grant details. Please try again.",
                redirect_to=Route.SHORTLIST,
            )
        return ActionResult.ok(data=grant)

    def toggle_shortlist(self, grant_id: str) -> ActionResult:
        if self.deck.is_shortlisted(grant_id):
            self.deck.remove_from_shortlist(grant_id)
            return ActionResult.ok("Removed from shortlist", data=False)
        self.deck.add_to_shortlist(grant_id)
        return ActionResult.ok("Added to shortlist", data=True)

    # ------------------------------------------------------------------
    # Drafting and submission
    # ------------------------------------------------------------------

    async def open_draft(self, grant_id: str) -> ActionResult:
        """Existing draft for the grant, or a freshly generated one."""
        grant = await self._resolve_grant(grant_id)
        if grant is None:
            return ActionResult.failed("Grant not found", redirect_to=Route.SHORTLIST)

        draft = self.drafts.get_draft(grant_id)
        if draft is not None:
            return ActionResult.ok(data=draft)

        content = generate_draft(grant, self.accounts.get_account(), self.profiles.profile)
        return await self.save_draft(grant_id, content, message="Draft generated")

    async def save_draft(self, grant_id: str, content: str, message: str = "Draft saved") -> ActionResult:
        """Persist the draft locally, then to the backend when one is configured."""
        try:
            draft = self.drafts.save_draft(grant_id, content)
        except StorageError as exc:
            logger.error("Failed to save draft for %s: %s", grant_id, exc)
            return ActionResult.failed("Failed to save draft. Please try again.", retryable=True)

        if self.drafts_api is not None:
            try:
                draft = await self._sync_draft(draft)
            except Exception as exc:
                logger.error("Failed to sync draft for %s: %s", grant_id, exc)
                return ActionResult.failed(
                    "Draft saved on this device only. Please try again.",
                    retryable=True,
                    data=draft,
                )
        return ActionResult.ok(message, data=draft)

    async def apply_suggestion(self, grant_id: str, kind: SuggestionKind) -> ActionResult:
        try:
            kind = SuggestionKind(kind)
        except ValueError:
            return ActionResult.failed(f"Unknown suggestion: {kind}")

        draft = self.drafts.get_draft(grant_id)
        if draft is None:
            return ActionResult.failed("No draft to improve", redirect_to=Route.APPLY)
        return await self.save_draft(
            grant_id,
            apply_suggestion(draft.content, kind),
            message=f"Your application has been improved for {kind.value}.",
        )

    async def submit_application(self, grant_id: str) -> ActionResult:
        draft = self.drafts.get_draft(grant_id)
        if draft is None or not draft.content.strip():
            return ActionResult.failed("Write your application before submitting", errors={"content": "Required"})

        try:
            response = await self.grants_api.submit(grant_id, draft.content)
        except Exception as exc:
            logger.error("Failed to submit application for %s: %s", grant_id, exc, exc_info=True)
            response = None

        if response is None or not response.success:
            return ActionResult.failed("Failed to submit application. Please try again.", retryable=True)

        logger.info("application_submitted grant=%s application=%s", grant_id, response.application_id)
        return ActionResult.ok(response.message, redirect_to=Route.SUBMITTED, data=response)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _resolve_grant(self, grant_id: str) -> Optional[Grant]:
        grant = self.deck.find_grant(grant_id)
        if grant is not None:
            return grant
        try:
            return await self.grants_api.get_by_id(grant_id)
        except GrantNotFoundError:
            logger.warning("grant_lookup id=%s result=not_found", grant_id)
        except Exception as exc:
            logger.error("Failed to load grant %s: %s", grant_id, exc)
        return None

    async def _sync_draft(self, draft: Draft) -> Draft:
        if draft.remote_id:
            await self.drafts_api.update(draft.remote_id, draft.content)
            return draft
        remote_id = await self.drafts_api.save(draft.grant_id, draft.content)
        logger.info("draft_synced grant=%s remote=%s", draft.grant_id, remote_id)
        return self.drafts.mark_synced(draft.grant_id, remote_id)
