"""Demo run of the matching funnel.

Builds a session from configuration and walks one scripted user through
account creation, onboarding, swiping, drafting and submission.

Usage:
    python -m capital_cupid.main [--storage DIR] [--reset]
"""

import argparse
import asyncio
import logging
from typing import List, Optional

from .accounts import AccountStore
from .api import ApiClient, DraftsApi, GrantsApi
from .catalog import load_catalog
from .config import Config, configure_logging, load_config
from .deck import DeckTracker
from .drafts import DraftStore, SuggestionKind
from .funnel import FunnelSession
from .matching import load_weights
from .models import FundingNeed, TeamSize, Verdict
from .profile import ProfileStore
from .storage import FileStore

logger = logging.getLogger(__name__)


def create_session(config: Config) -> FunnelSession:
    """Wire stores and backend for one session from `config`."""
    store = FileStore(config.storage_dir)
    catalog = load_catalog(config.catalog_path)
    weights = load_weights(config.weights_path)
    drafts_api = DraftsApi(ApiClient(config.api_base_url)) if config.api_base_url else None
    return FunnelSession(
        accounts=AccountStore(store),
        profiles=ProfileStore(store),
        deck=DeckTracker(store, dedup_decisions=config.dedup_decisions),
        drafts=DraftStore(store),
        grants_api=GrantsApi(catalog, weights),
        drafts_api=drafts_api,
    )


async def run_demo(session: FunnelSession) -> None:
    logger.info("=" * 60)
    logger.info("Starting demo session")
    logger.info("=" * 60)

    if not session.accounts.has_account():
        result = session.create_account("Kedai Digital Sdn Bhd", "hello@kedai.my")
        logger.info("Account: %s", result.message)

    result = await session.complete_onboarding(
        industry="technology",
        location="Selangor",
        team_size_bracket=TeamSize.SMALL,
        needs=[FundingNeed.DIGITALISATION, FundingNeed.GROWTH],
        years=4,
    )
    if not result.success:
        logger.warning("Onboarding: %s", result.message)
        return

    while session.deck.current_grant is not None:
        grant = session.deck.current_grant
        verdict = Verdict.ACCEPT if (grant.score or 0) >= 0.8 else Verdict.REJECT
        logger.info("Card %s (score %.2f) -> %s", grant.id, grant.score or 0, verdict.value)
        session.swipe(verdict)

    shortlist = (await session.shortlist()).data or []
    logger.info("Shortlist: %s", ", ".join(grant.id for grant in shortlist) or "empty")

    for grant in shortlist:
        await session.open_draft(grant.id)
        await session.apply_suggestion(grant.id, SuggestionKind.FORMAL)
        result = await session.submit_application(grant.id)
        logger.info("Submit %s: %s", grant.id, result.message)

    summary = await session.funding_summary()
    if summary.success:
        logger.info(
            "Potential funding: RM %s across %d grants (%s, %d%%)",
            f"{summary.data.total_funding:,}",
            summary.data.grant_count,
            summary.data.current_stage,
            summary.data.progress_percent,
        )

    logger.info("Demo session complete")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Capital Cupid matching demo")
    parser.add_argument("--storage", help="Directory for persisted state (overrides config)")
    parser.add_argument("--reset", action="store_true", help="Clear the deck and shortlist first")
    args = parser.parse_args(argv)

    config = load_config()
    if args.storage:
        config = config.model_copy(update={"storage_dir": args.storage})
    configure_logging(config)

    session = create_session(config)
    if args.reset:
        session.start_over()
    asyncio.run(run_demo(session))


if __name__ == "__main__":
    main()
