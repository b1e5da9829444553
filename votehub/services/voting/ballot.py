"""Ballot submission.

A ballot names exactly three distinct candidates. Validation and
the writes that follow share one database transaction: either all votes,
all tally increments and the voter's ``has_voted`` flag commit together, or
nothing does.
"""

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from votehub.extensions import db
from votehub.services import store
from votehub.services.voting.errors import BallotError

BALLOT_SIZE = 3


def _accepted(votes):
    return {"ok": True, "error": None, "votes": votes}


def _rejected(error):
    return {"ok": False, "error": error, "votes": []}


def _is_well_formed(voter_identifier, selected_candidate_ids):
    if not isinstance(voter_identifier, str) or not voter_identifier.strip():
        return False
    if not isinstance(selected_candidate_ids, (list, tuple)):
        return False
    if len(selected_candidate_ids) != BALLOT_SIZE:
        return False
    if any(
        isinstance(value, bool) or not isinstance(value, int)
        for value in selected_candidate_ids
    ):
        return False
    return len(set(selected_candidate_ids)) == BALLOT_SIZE


def _validate(voter, selected_candidate_ids):
    if voter is None:
        return BallotError.UNKNOWN_VOTER
    if voter.has_voted:
        return BallotError.ALREADY_VOTED

    existing_ids = store.find_existing_candidate_ids(selected_candidate_ids)
    # First offending id wins; existence is checked before self-vote.
    for candidate_id in selected_candidate_ids:
        if candidate_id not in existing_ids:
            return BallotError.UNKNOWN_CANDIDATE
        if candidate_id == voter.id:
            return BallotError.SELF_VOTE
    return None


def submit_ballot(voter_identifier, selected_candidate_ids):
    if not _is_well_formed(voter_identifier, selected_candidate_ids):
        return _rejected(BallotError.MALFORMED_BALLOT)

    voter_identifier = voter_identifier.strip()
    selected_candidate_ids = list(selected_candidate_ids)

    try:
        voter = store.find_candidate_by_voter_id(voter_identifier, lock=True)
        error = _validate(voter, selected_candidate_ids)
        if error is not None:
            db.session.rollback()
            current_app.logger.warning(
                "Ballot from %s rejected: %s", voter_identifier, error.name
            )
            return _rejected(error)

        votes = [
            store.record_vote(voter.id, candidate_id)
            for candidate_id in selected_candidate_ids
        ]

        if not store.set_has_voted(voter.id):
            # A concurrent submission for this voter committed first.
            db.session.rollback()
            current_app.logger.warning(
                "Ballot from %s rejected: lost race to a concurrent submission",
                voter_identifier,
            )
            return _rejected(BallotError.ALREADY_VOTED)

        db.session.commit()
    except (SQLAlchemyError, store.StoreError):
        db.session.rollback()
        current_app.logger.exception("Ballot from %s could not be stored", voter_identifier)
        return _rejected(BallotError.STORAGE_FAILURE)
    except BaseException:
        # Aborted mid-transaction; discard whatever was flushed.
        db.session.rollback()
        raise

    current_app.logger.info(
        "Ballot accepted from candidate %s for %s", voter.id, selected_candidate_ids
    )
    return _accepted(votes)
