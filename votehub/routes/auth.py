from flask import current_app, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from votehub.services import store


def register_auth_routes(app):
    @app.route("/api/login", methods=["POST"])
    def login():
        data = request.get_json(silent=True) or {}
        voter_id = str(data.get("voter_id") or "").strip()

        if not voter_id:
            return jsonify({"message": "Voter ID is required"}), 400

        candidate = store.find_candidate_by_voter_id(voter_id)
        if not candidate:
            current_app.logger.warning("Login attempted with unknown voter ID: %s", voter_id)
            return jsonify({"message": "Invalid voter ID"}), 401

        login_user(candidate)
        return jsonify({"candidate": candidate.to_login_dict()})

    @app.route("/api/logout", methods=["POST"])
    def logout():
        logout_user()
        return jsonify({"ok": True})

    @app.route("/api/me")
    @login_required
    def me():
        return jsonify({"candidate": current_user.to_login_dict()})
