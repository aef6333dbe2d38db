"""User model definition."""

from datetime import datetime

from . import db


class User(db.Model):
    """Represents an application account, local or externally authenticated."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=True)
    password_hash = db.Column(db.String(255), nullable=True)
    auth_provider = db.Column(
        db.String(50),
        nullable=False,
        default="email",
        server_default=db.text("'email'"),
    )
    role = db.Column(db.String(32), nullable=False, default="user")
    email_verified = db.Column(db.Boolean, nullable=False, default=False)
    is_active = db.Column(
        db.Boolean,
        nullable=False,
        default=True,
        server_default=db.text("true"),
    )
    google_id = db.Column(db.String(255), unique=True, nullable=True)
    profile_picture = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )
    sessions = db.relationship(
        "UserSession",
        back_populates="user",
        lazy="dynamic",
    )

    @property
    def is_local(self) -> bool:
        return self.auth_provider == "email"

    def to_dict(self) -> dict:
        """Identity fields that are safe to print or return over HTTP."""

        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "auth_provider": self.auth_provider,
            "email_verified": self.email_verified,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
