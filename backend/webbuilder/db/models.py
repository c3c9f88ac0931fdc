from sqlalchemy import Column, Date, DateTime, Integer, String
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    api_token = Column(String(128), nullable=False, unique=True, index=True)

    # Daily generation quota
    prompts_used_today = Column(Integer, nullable=False, default=0)
    prompts_reset_date = Column(Date, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
