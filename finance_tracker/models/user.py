# finance_tracker/models/user.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from finance_tracker.core.database import Base

ROLE_ADMIN = "Admin"
ROLE_USER = "User"

class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(length=50), unique=True, index=True, nullable=False)
    email = Column(String(length=255), unique=True, index=True, nullable=False)
    first_name = Column(String(length=50), nullable=False)
    last_name = Column(String(length=50), nullable=False)
    role = Column(String(length=20), nullable=False, default=ROLE_USER)  # Admin or User
    is_active = Column(Boolean, nullable=False, default=True)
    avatar_url = Column(String, nullable=True)
    currency = Column(String(length=8), nullable=False, default="₹")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login_at = Column(DateTime, nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def __repr__(self):
        return f"<User username={self.username} role={self.role}>"
