"""UserSession model definition."""

from datetime import datetime

from . import db


class UserSession(db.Model):
    """One authenticated login; deactivated on logout or forced revocation."""

    __tablename__ = "user_sessions"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    token_hash = db.Column(db.String(64), nullable=False, index=True)
    is_active = db.Column(
        db.Boolean,
        nullable=False,
        default=True,
        server_default=db.text("true"),
    )
    expires_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    user = db.relationship("User", back_populates="sessions")

    def deactivate(self) -> None:
        """Revoke the session permanently."""

        self.is_active = False

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<UserSession {self.id} user={self.user_id} active={self.is_active}>"
