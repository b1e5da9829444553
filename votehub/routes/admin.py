from flask import current_app, jsonify, request

from votehub.services import store


def register_admin_routes(app):
    @app.route("/api/candidates", methods=["POST"])
    def create_candidate():
        data = request.get_json(silent=True) or {}
        name = str(data.get("name") or "").strip()
        voter_id = str(data.get("voter_id") or "").strip()

        if not name or not voter_id:
            return jsonify({"message": "Name and voter ID are required"}), 400

        try:
            candidate = store.create_candidate(name, voter_id)
        except store.DuplicateVoterId:
            current_app.logger.warning("Duplicate voter ID rejected: %s", voter_id)
            return jsonify({"message": "Voter ID already exists"}), 400

        return jsonify(candidate.to_dict()), 201

    @app.route("/api/candidates/bulk", methods=["POST"])
    def bulk_create_candidates():
        data = request.get_json(silent=True) or {}
        rows = data.get("candidates")

        if not isinstance(rows, list):
            return jsonify({"message": "Expected a list of candidates"}), 400

        try:
            created, skipped = store.create_candidates(rows)
        except store.StoreError:
            current_app.logger.exception("Bulk candidate import failed")
            return jsonify({"message": "Could not import candidates, please retry"}), 500

        return (
            jsonify(
                {
                    "created": [candidate.to_dict() for candidate in created],
                    "skipped": skipped,
                }
            ),
            201,
        )
