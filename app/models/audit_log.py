"""Append-only audit trail of user lifecycle actions.
No updates or deletes - every record is permanent."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum as SQLEnum
from app.database import Base
import enum


class ActionType(str, enum.Enum):
    CREATE = "CREATE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class Audit(Base):
    __tablename__ = "audits"

    id = Column(Integer, primary_key=True, index=True)

    # The acting user (the admin, for block and unblock)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    action = Column(SQLEnum(ActionType), nullable=False, index=True)
    description = Column(Text, nullable=False)

    # Best-effort client address; "unknown" when it cannot be resolved
    ip_address = Column(String(64), nullable=False)

    timestamp = Column(DateTime(timezone=True), nullable=False)
