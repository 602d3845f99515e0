"""Unit tests for the deck / decision tracker state machine."""

import json

import pytest

from capital_cupid.catalog import MOCK_GRANTS
from capital_cupid.deck import DeckState, DeckStateError, DeckTracker
from capital_cupid.models import Verdict
from capital_cupid.storage import StorageError, StorageKeys

from conftest import FIXED_NOW, make_grant


def test_initial_state_is_loading(deck):
    assert deck.state is DeckState.LOADING
    assert deck.current_index == 0
    assert deck.current_grant is None
    assert deck.shortlist_ids == []


def test_set_candidates_activates_first_card(deck):
    deck.set_candidates(MOCK_GRANTS)

    assert deck.state is DeckState.ACTIVE
    assert deck.current_index == 0
    assert deck.current_grant.id == "mdec-digital-boost"
    assert deck.remaining == 3


def test_accept_then_advance_with_primitives(deck):
    deck.set_candidates(MOCK_GRANTS)

    deck.record_decision("mdec-digital-boost", Verdict.ACCEPT)
    deck.add_to_shortlist("mdec-digital-boost")
    deck.advance()

    assert deck.shortlist_ids == ["mdec-digital-boost"]
    assert deck.current_index == 1


def test_empty_candidates_exhaust_deck_keeping_history(deck):
    deck.set_candidates(MOCK_GRANTS)
    deck.record_swipe("mdec-digital-boost", Verdict.ACCEPT)

    deck.set_candidates([])

    assert deck.state is DeckState.EXHAUSTED
    assert deck.shortlist_ids == ["mdec-digital-boost"]
    assert len(deck.decisions) == 1


def test_record_decision_does_not_move_cursor(deck):
    deck.set_candidates(MOCK_GRANTS)
    decision = deck.record_decision("sme-corp-export", Verdict.REJECT)

    assert deck.current_index == 0
    assert decision.timestamp == FIXED_NOW
    assert deck.shortlist_ids == []


def test_advance_saturates_at_length(deck):
    deck.set_candidates(MOCK_GRANTS)
    seen = []
    for _ in range(10):
        seen.append(deck.advance())

    assert seen == sorted(seen)
    assert max(seen) == 3
    assert deck.state is DeckState.EXHAUSTED
    assert deck.current_grant is None


def test_advance_on_empty_deck_is_noop(deck):
    deck.set_candidates([])
    assert deck.advance() == 0
    assert deck.state is DeckState.EXHAUSTED


def test_shortlist_add_is_idempotent(deck):
    deck.add_to_shortlist("cradle-cip")
    deck.add_to_shortlist("cradle-cip")
    assert deck.shortlist_ids == ["cradle-cip"]


def test_shortlist_remove_absent_is_noop(deck):
    deck.add_to_shortlist("cradle-cip")
    deck.remove_from_shortlist("sme-corp-export")
    assert deck.shortlist_ids == ["cradle-cip"]


def test_shortlist_remove_keeps_decision_log(deck):
    deck.set_candidates(MOCK_GRANTS)
    deck.record_swipe("mdec-digital-boost", Verdict.ACCEPT)

    deck.remove_from_shortlist("mdec-digital-boost")

    assert deck.shortlist_ids == []
    assert [d.grant_id for d in deck.decisions] == ["mdec-digital-boost"]


def test_decision_log_appends_duplicates_by_default(deck):
    deck.record_decision("cradle-cip", Verdict.REJECT)
    deck.record_decision("cradle-cip", Verdict.ACCEPT)
    assert [d.verdict for d in deck.decisions] == [Verdict.REJECT, Verdict.ACCEPT]


def test_decision_log_dedup_keeps_latest(store, clock):
    deck = DeckTracker(store, dedup_decisions=True, clock=clock)
    deck.record_decision("cradle-cip", Verdict.REJECT)
    deck.record_decision("mdec-digital-boost", Verdict.ACCEPT)
    deck.record_decision("cradle-cip", Verdict.ACCEPT)

    assert [(d.grant_id, d.verdict) for d in deck.decisions] == [
        ("mdec-digital-boost", Verdict.ACCEPT),
        ("cradle-cip", Verdict.ACCEPT),
    ]


def test_record_swipe_accept_is_one_transition(deck, store):
    deck.set_candidates(MOCK_GRANTS)
    writes = []
    original = store.set_item
    store.set_item = lambda key, value: (writes.append(key), original(key, value))

    deck.record_swipe("mdec-digital-boost", Verdict.ACCEPT)

    assert writes == [StorageKeys.DECK]
    assert deck.shortlist_ids == ["mdec-digital-boost"]
    assert deck.current_index == 1
    assert deck.decisions[0].verdict is Verdict.ACCEPT


def test_record_swipe_reject_skips_shortlist(deck):
    deck.set_candidates(MOCK_GRANTS)
    deck.record_swipe("mdec-digital-boost", "reject")

    assert deck.shortlist_ids == []
    assert deck.current_index == 1


def test_record_swipe_requires_current_card(deck):
    deck.set_candidates(MOCK_GRANTS)
    with pytest.raises(DeckStateError):
        deck.record_swipe("cradle-cip", Verdict.ACCEPT)
    assert deck.decisions == []


def test_record_swipe_rejected_when_exhausted(deck):
    deck.set_candidates([make_grant("only")])
    deck.record_swipe("only", Verdict.REJECT)

    with pytest.raises(DeckStateError):
        deck.record_swipe("only", Verdict.REJECT)
    assert deck.current_index == 1


def test_reset_clears_everything(deck):
    deck.set_candidates(MOCK_GRANTS)
    deck.record_swipe("mdec-digital-boost", Verdict.ACCEPT)

    deck.reset()

    assert deck.state is DeckState.LOADING
    assert deck.grants == []
    assert deck.decisions == []
    assert deck.shortlist_ids == []


def test_new_candidates_reset_cursor(deck):
    deck.set_candidates(MOCK_GRANTS)
    deck.advance()
    deck.advance()

    deck.set_candidates(MOCK_GRANTS[:2])

    assert deck.current_index == 0
    assert deck.state is DeckState.ACTIVE


def test_persistence_round_trip(deck, store, clock):
    deck.set_candidates(MOCK_GRANTS)
    deck.record_swipe("mdec-digital-boost", Verdict.ACCEPT)
    deck.record_swipe("sme-corp-export", Verdict.REJECT)
    deck.add_to_shortlist("cradle-cip")

    rehydrated = DeckTracker(store, clock=clock)

    assert rehydrated.snapshot() == deck.snapshot()
    assert rehydrated.state is DeckState.ACTIVE
    assert rehydrated.current_grant.id == "cradle-cip"


def test_persisted_record_uses_camel_case(deck, store):
    deck.set_candidates(MOCK_GRANTS[:1])
    data = json.loads(store.get_item(StorageKeys.DECK))
    assert set(data) == {"grants", "currentIndex", "decisions", "shortlistIds", "loaded"}


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        json.dumps({"grants": [], "currentIndex": 5, "loaded": True}),
        json.dumps({"shortlistIds": ["a", "a"]}),
        json.dumps({"currentIndex": -1}),
    ],
)
def test_corrupt_snapshot_falls_back_to_empty(store, raw):
    store.set_item(StorageKeys.DECK, raw)

    deck = DeckTracker(store)

    assert deck.state is DeckState.LOADING
    assert deck.shortlist_ids == []
    assert store.get_item(StorageKeys.DECK) is None


def test_write_failure_keeps_in_memory_state(deck, store):
    def broken(key, value):
        raise StorageError("disk full")

    store.set_item = broken
    deck.set_candidates(MOCK_GRANTS)
    deck.record_swipe("mdec-digital-boost", Verdict.ACCEPT)

    assert deck.shortlist_ids == ["mdec-digital-boost"]
    assert deck.current_index == 1
