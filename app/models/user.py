from sqlalchemy import Column, Integer, String, Boolean, Enum
from app.core.permissions import Role
from app.db.session import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    role = Column(Enum(Role, name="user_role"), nullable=False, default=Role.CUSTOMER)
    is_active = Column(Boolean, default=True)
