from dataclasses import dataclass

from flask_login import UserMixin
from werkzeug.security import check_password_hash


AGENT_ROLE = "agent"


@dataclass(frozen=True)
class User(UserMixin):
    id: int
    username: str
    password: str  # werkzeug hash, never the raw password
    role: str = AGENT_ROLE

    def __repr__(self):
        return f"<User {self.username} ({self.role})>"

    def check_password(self, password):
        return check_password_hash(self.password, password)

    def to_dict(self):
        return {"id": self.id, "username": self.username, "role": self.role}
