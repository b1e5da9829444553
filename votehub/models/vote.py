from votehub.extensions import db


class Vote(db.Model):
    __tablename__ = "votes"
    __table_args__ = (
        db.UniqueConstraint("voter_id", "voted_for_id", name="uq_votes_voter_recipient"),
        db.CheckConstraint("voter_id <> voted_for_id", name="ck_votes_no_self_vote"),
    )

    id = db.Column(db.Integer, primary_key=True)
    voter_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False)
    voted_for_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "voter_id": self.voter_id,
            "voted_for_id": self.voted_for_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
