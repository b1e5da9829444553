"""Record store for candidates and votes.

Every function works on the Flask-SQLAlchemy session of the current app
context. Writes used by the ballot transaction (``record_vote`` and
``set_has_voted``) only flush; the caller commits or rolls back so several
writes land as one unit.
"""

import math

from flask import current_app
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError

from votehub.extensions import db
from votehub.models import Candidate, Vote


class StoreError(Exception):
    pass


class DuplicateVoterId(StoreError):
    def __init__(self, voter_id):
        super().__init__(f"Voter ID already exists: {voter_id}")
        self.voter_id = voter_id


# Ids outside a signed 64-bit INTEGER can never be stored.
MAX_ID = 2**63 - 1


def round_half_up(value):
    return int(math.floor(value + 0.5))


def _storable_id(candidate_id):
    return -MAX_ID - 1 <= candidate_id <= MAX_ID


def find_candidate_by_id(candidate_id):
    if not _storable_id(candidate_id):
        return None
    return db.session.get(Candidate, candidate_id)


def find_candidate_by_voter_id(voter_id, lock=False):
    query = select(Candidate).where(Candidate.voter_id == voter_id)
    if lock:
        query = query.with_for_update()
    return db.session.execute(query).scalar_one_or_none()


def find_existing_candidate_ids(candidate_ids):
    candidate_ids = [
        candidate_id for candidate_id in candidate_ids if _storable_id(candidate_id)
    ]
    if not candidate_ids:
        return set()
    rows = db.session.execute(
        select(Candidate.id).where(Candidate.id.in_(candidate_ids))
    ).scalars()
    return set(rows)


def create_candidate(name, voter_id):
    name = (name or "").strip()
    voter_id = (voter_id or "").strip()

    if not name or not voter_id:
        raise ValueError("Name and voter ID are required")

    if find_candidate_by_voter_id(voter_id) is not None:
        raise DuplicateVoterId(voter_id)

    candidate = Candidate(
        name=name, voter_id=voter_id, has_voted=False, votes_received=0
    )
    db.session.add(candidate)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with another insert of the same voter id.
        db.session.rollback()
        raise DuplicateVoterId(voter_id)

    current_app.logger.info("Candidate %s created (voter id %s)", candidate.id, voter_id)
    return candidate


def create_candidates(rows):
    """Insert many candidates in one commit.

    Each row is a mapping with ``name`` and ``voter_id``. Rows that cannot be
    stored are returned in ``skipped`` with the reason instead of aborting
    the whole import.
    """
    created = []
    skipped = []
    seen = set()

    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            skipped.append({"row": index, "reason": "Row must be an object"})
            continue

        name = str(row.get("name") or "").strip()
        voter_id = str(row.get("voter_id") or "").strip()

        if not name or not voter_id:
            skipped.append(
                {"row": index, "voter_id": voter_id, "reason": "Name and voter ID are required"}
            )
            continue

        if voter_id in seen or find_candidate_by_voter_id(voter_id) is not None:
            skipped.append(
                {"row": index, "voter_id": voter_id, "reason": "Voter ID already exists"}
            )
            continue

        seen.add(voter_id)
        candidate = Candidate(
            name=name, voter_id=voter_id, has_voted=False, votes_received=0
        )
        db.session.add(candidate)
        created.append(candidate)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise StoreError("Bulk import conflicted with a concurrent insert")

    current_app.logger.info(
        "Bulk import created %d candidates, skipped %d", len(created), len(skipped)
    )
    return created, skipped


def list_all_candidates():
    return db.session.execute(select(Candidate).order_by(Candidate.id)).scalars().all()


def set_has_voted(candidate_id):
    """Flip ``has_voted`` from false to true.

    Returns True when this call set the flag and False when it was already
    set, so two racing submissions for one voter cannot both claim it.
    """
    result = db.session.execute(
        update(Candidate)
        .where(Candidate.id == candidate_id, Candidate.has_voted.is_(False))
        .values(has_voted=True)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def record_vote(voter_id, voted_for_id):
    vote = Vote(voter_id=voter_id, voted_for_id=voted_for_id)
    db.session.add(vote)
    db.session.flush()

    result = db.session.execute(
        update(Candidate)
        .where(Candidate.id == voted_for_id)
        .values(votes_received=Candidate.votes_received + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise StoreError(f"Candidate {voted_for_id} disappeared while recording a vote")
    return vote


def list_votes_by_voter(voter_id):
    return (
        db.session.execute(
            select(Vote).where(Vote.voter_id == voter_id).order_by(Vote.id)
        )
        .scalars()
        .all()
    )


def list_candidates_by_votes_descending():
    return (
        db.session.execute(
            select(Candidate).order_by(Candidate.votes_received.desc(), Candidate.id)
        )
        .scalars()
        .all()
    )


def compute_voting_stats():
    total_candidates_q = select(func.count(Candidate.id)).scalar_subquery()
    participated_q = (
        select(func.count(Candidate.id))
        .where(Candidate.has_voted.is_(True))
        .scalar_subquery()
    )
    total_votes_q = select(func.count(Vote.id)).scalar_subquery()

    total_candidates, participated, total_votes = db.session.execute(
        select(total_candidates_q, participated_q, total_votes_q)
    ).one()
    return _voting_stats(total_candidates, participated, total_votes)


def summarize_candidates(candidates):
    """Voting stats derived from one already-fetched set of candidate rows.

    ``total_votes`` is the sum of the tallies, which equals the vote count
    since every vote insert increments its recipient in the same transaction.
    """
    return _voting_stats(
        len(candidates),
        sum(1 for candidate in candidates if candidate.has_voted),
        sum(candidate.votes_received for candidate in candidates),
    )


def _voting_stats(total_candidates, participated, total_votes):
    participation_rate = (
        round_half_up(participated / total_candidates * 100) if total_candidates > 0 else 0
    )

    return {
        "total_votes": total_votes,
        "voters_participated": participated,
        "remaining_voters": total_candidates - participated,
        "participation_rate": participation_rate,
    }
