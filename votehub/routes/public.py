from flask import abort, jsonify, request
from flask_login import current_user

from votehub.services import store
from votehub.services.voting import get_results, get_status, submit_ballot


def register_public_routes(app):
    @app.route("/api/candidates")
    def list_candidates():
        candidates = store.list_all_candidates()
        return jsonify([candidate.to_dict() for candidate in candidates])

    @app.route("/api/candidates/<int:candidate_id>/votes")
    def candidate_votes(candidate_id):
        candidate = store.find_candidate_by_id(candidate_id)
        if candidate is None:
            abort(404)
        votes = store.list_votes_by_voter(candidate.id)
        return jsonify([vote.to_dict() for vote in votes])

    @app.route("/api/votes", methods=["POST"])
    def submit_votes():
        data = request.get_json(silent=True) or {}
        voter_id = data.get("voter_id")
        if voter_id is not None:
            voter_id = str(voter_id).strip()
        elif current_user.is_authenticated:
            voter_id = current_user.voter_id

        result = submit_ballot(voter_id, data.get("selected_candidates"))
        if not result["ok"]:
            error = result["error"]
            return (
                jsonify({"message": error.message, "error": error.name}),
                error.status_code,
            )

        return jsonify(
            {
                "message": "Votes submitted successfully",
                "votes": [vote.to_dict() for vote in result["votes"]],
            }
        )

    @app.route("/api/results")
    def results():
        return jsonify(get_results())

    @app.route("/api/status")
    def status():
        partition = get_status()
        return jsonify(
            {
                "voted": [candidate.to_dict() for candidate in partition["voted"]],
                "pending": [candidate.to_dict() for candidate in partition["pending"]],
            }
        )
