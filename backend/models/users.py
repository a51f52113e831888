# backend/models/users.py
from sqlalchemy import Boolean, Column, Integer, String, false
from database import Base

# Represents a customer or administrator account
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, default="")
    # Uniqueness lives in the store so concurrent registrations cannot both succeed
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False) # bcrypt hash
    phone = Column(String, nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())
