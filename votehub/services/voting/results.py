from votehub.services import store


def candidate_percentage(votes_received, total_votes):
    if total_votes <= 0:
        return 0
    return store.round_half_up(votes_received / total_votes * 1000) / 10


def get_results():
    candidates = store.list_candidates_by_votes_descending()
    # Stats and percentages share one read of the rows.
    stats = store.summarize_candidates(candidates)
    total_votes = stats["total_votes"]

    rows = []
    for candidate in candidates:
        row = candidate.to_dict()
        row["percentage"] = candidate_percentage(candidate.votes_received, total_votes)
        rows.append(row)

    return {"candidates": rows, "stats": stats}


def get_status():
    voted = []
    pending = []
    for candidate in store.list_all_candidates():
        if candidate.has_voted:
            voted.append(candidate)
        else:
            pending.append(candidate)
    return {"voted": voted, "pending": pending}
