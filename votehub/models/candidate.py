from flask_login import UserMixin

from votehub.extensions import db


class Candidate(UserMixin, db.Model):
    __tablename__ = "candidates"
    __table_args__ = (
        db.CheckConstraint("votes_received >= 0", name="ck_candidates_votes_received"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    voter_id = db.Column(db.String(50), unique=True, nullable=False)
    has_voted = db.Column(db.Boolean, nullable=False, default=False)
    votes_received = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now())

    votes_cast = db.relationship(
        "Vote", foreign_keys="Vote.voter_id", backref="voter", lazy=True
    )
    votes_for = db.relationship(
        "Vote", foreign_keys="Vote.voted_for_id", backref="voted_for", lazy=True
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "voter_id": self.voter_id,
            "has_voted": self.has_voted,
            "votes_received": self.votes_received,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def to_login_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "voter_id": self.voter_id,
            "has_voted": self.has_voted,
        }
