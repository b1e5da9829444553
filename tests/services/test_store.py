import pytest

from votehub.models import Candidate, Vote
from votehub.services import store


def test_create_candidate_starts_with_no_votes(db_session):
    candidate = store.create_candidate("  Erin ", " VOTER-E ")

    assert candidate.id is not None
    assert candidate.name == "Erin"
    assert candidate.voter_id == "VOTER-E"
    assert candidate.has_voted is False
    assert candidate.votes_received == 0
    assert candidate.created_at is not None


def test_create_candidate_rejects_duplicate_voter_id(db_session, candidates):
    with pytest.raises(store.DuplicateVoterId):
        store.create_candidate("Impostor", "VOTER-A")

    assert Candidate.query.count() == 4
    assert store.find_candidate_by_voter_id("VOTER-A").name == "Alice"


def test_create_candidate_requires_name_and_voter_id(db_session):
    with pytest.raises(ValueError):
        store.create_candidate("", "VOTER-X")
    with pytest.raises(ValueError):
        store.create_candidate("Xavier", "   ")


def test_find_candidate_lookups(db_session, candidates):
    bob = candidates[1]

    assert store.find_candidate_by_id(bob.id).voter_id == "VOTER-B"
    assert store.find_candidate_by_voter_id("VOTER-B").id == bob.id
    assert store.find_candidate_by_voter_id("VOTER-B", lock=True).id == bob.id
    assert store.find_candidate_by_id(999) is None
    assert store.find_candidate_by_voter_id("NOPE") is None


def test_record_vote_increments_recipient_tally(db_session, candidates):
    alice, bob = candidates[0], candidates[1]

    vote = store.record_vote(alice.id, bob.id)
    db_session.commit()

    assert vote.voter_id == alice.id
    assert vote.voted_for_id == bob.id
    assert store.find_candidate_by_id(bob.id).votes_received == 1
    assert Vote.query.count() == 1


def test_record_vote_rolls_back_with_its_tally(db_session, candidates):
    alice, bob = candidates[0], candidates[1]

    store.record_vote(alice.id, bob.id)
    db_session.rollback()

    assert Vote.query.count() == 0
    assert store.find_candidate_by_id(bob.id).votes_received == 0


def test_set_has_voted_only_flips_once(db_session, candidates):
    alice = candidates[0]

    assert store.set_has_voted(alice.id) is True
    db_session.commit()
    assert store.set_has_voted(alice.id) is False
    db_session.commit()

    assert store.find_candidate_by_id(alice.id).has_voted is True


def test_list_votes_by_voter(db_session, candidates):
    alice, bob, carol, _ = candidates
    store.record_vote(alice.id, bob.id)
    store.record_vote(alice.id, carol.id)
    store.record_vote(bob.id, carol.id)
    db_session.commit()

    votes = store.list_votes_by_voter(alice.id)
    assert [vote.voted_for_id for vote in votes] == [bob.id, carol.id]


def test_candidates_by_votes_descending_keeps_natural_order_on_ties(db_session, candidates):
    alice, bob, carol, dave = candidates
    store.record_vote(alice.id, carol.id)
    store.record_vote(bob.id, carol.id)
    store.record_vote(alice.id, dave.id)
    store.record_vote(carol.id, bob.id)
    db_session.commit()

    ordered = store.list_candidates_by_votes_descending()
    assert [candidate.name for candidate in ordered] == ["Carol", "Bob", "Dave", "Alice"]


def test_voting_stats_with_no_candidates(db_session):
    assert store.compute_voting_stats() == {
        "total_votes": 0,
        "voters_participated": 0,
        "remaining_voters": 0,
        "participation_rate": 0,
    }


def test_voting_stats_rounds_participation_rate(db_session, candidates):
    store.set_has_voted(candidates[0].id)
    db_session.commit()

    stats = store.compute_voting_stats()
    assert stats["voters_participated"] == 1
    assert stats["remaining_voters"] == 3
    assert stats["participation_rate"] == 25


def test_voting_stats_rounds_half_up(db_session):
    for index in range(8):
        store.create_candidate(f"Candidate {index}", f"V{index}")
    # 1 of 8 is 12.5%, which rounds up.
    store.set_has_voted(store.find_candidate_by_voter_id("V0").id)
    db_session.commit()

    assert store.compute_voting_stats()["participation_rate"] == 13


def test_bulk_import_skips_bad_and_duplicate_rows(db_session, candidates):
    created, skipped = store.create_candidates(
        [
            {"name": "Erin", "voter_id": "VOTER-E"},
            {"name": "Frank", "voter_id": "VOTER-A"},
            {"name": "", "voter_id": "VOTER-G"},
            {"name": "Grace", "voter_id": "VOTER-E"},
            "not a row",
            {"name": "Heidi", "voter_id": "VOTER-H"},
        ]
    )

    assert [candidate.voter_id for candidate in created] == ["VOTER-E", "VOTER-H"]
    assert [entry["row"] for entry in skipped] == [1, 2, 3, 4]
    assert Candidate.query.count() == 6


def test_ids_beyond_integer_range_are_not_found(db_session, candidates):
    assert store.find_candidate_by_id(2**70) is None
    assert store.find_candidate_by_id(-(2**70)) is None
    assert store.find_existing_candidate_ids([1, 2**70, 4]) == {1, 4}
    assert store.find_existing_candidate_ids([2**64]) == set()


def test_summarize_candidates_matches_stored_stats(db_session, candidates):
    alice, bob, carol, dave = candidates
    for recipient in (bob, carol, dave):
        store.record_vote(alice.id, recipient.id)
    store.set_has_voted(alice.id)
    db_session.commit()

    summary = store.summarize_candidates(store.list_candidates_by_votes_descending())

    assert summary == store.compute_voting_stats()
    assert summary == {
        "total_votes": 3,
        "voters_participated": 1,
        "remaining_voters": 3,
        "participation_rate": 25,
    }
