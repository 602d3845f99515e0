"""Pytest configuration and fixtures."""

from datetime import date, datetime, timezone

import pytest

from capital_cupid.accounts import AccountStore
from capital_cupid.api import GrantsApi
from capital_cupid.catalog import MOCK_GRANTS, StaticCatalog
from capital_cupid.deck import DeckTracker
from capital_cupid.drafts import DraftStore
from capital_cupid.funnel import FunnelSession
from capital_cupid.models import Grant, SMEProfile
from capital_cupid.profile import ProfileStore
from capital_cupid.storage import MemoryStore

FIXED_NOW = datetime(2024, 9, 1, 8, 30, tzinfo=timezone.utc)


def make_grant(grant_id: str, tags=None, title: str = "Test Grant") -> Grant:
    """Helper to create a test grant."""
    return Grant(
        id=grant_id,
        title=title,
        agency="Test Agency",
        amount="RM 10,000",
        deadline=date(2024, 12, 1),
        summary=f"Summary for {grant_id}",
        eligibility=["Registered SME"],
        tags=tags or [],
    )


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def catalog():
    return StaticCatalog(MOCK_GRANTS)


@pytest.fixture
def tech_profile():
    """Technology business looking to digitalise."""
    return SMEProfile(industry="technology", needs=["Digitalisation"])


@pytest.fixture
def deck(store, clock):
    return DeckTracker(store, clock=clock)


@pytest.fixture
def session(store, catalog, clock):
    return FunnelSession(
        accounts=AccountStore(store),
        profiles=ProfileStore(store),
        deck=DeckTracker(store, clock=clock),
        drafts=DraftStore(store, clock=clock),
        grants_api=GrantsApi(catalog),
    )
