# server/models/user.py

from datetime import datetime
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from . import Base


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for marketplace users.
    Stores the bcrypt hash and, when enrolled, the base32 TOTP secret.
    A NULL otp_secret means the account logs in with a password only.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    otp_secret = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    products = relationship("Product", back_populates="user")
