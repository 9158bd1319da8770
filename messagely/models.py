from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from .database import Base


def utcnow() -> datetime:
	"""Naive UTC timestamp, the form every column in this schema stores."""
	return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
	__tablename__ = "users"

	username = Column(String(64), primary_key=True)
	password = Column(String(256), nullable=False)
	first_name = Column(String(128))
	last_name = Column(String(128))
	phone = Column(String(32))
	join_at = Column(DateTime, default=utcnow, nullable=False)
	last_login_at = Column(DateTime)

	sent_messages = relationship("Message", back_populates="from_user", foreign_keys="Message.from_username")
	received_messages = relationship("Message", back_populates="to_user", foreign_keys="Message.to_username")


class Message(Base):
	__tablename__ = "messages"

	id = Column(Integer, primary_key=True, index=True)
	from_username = Column(String(64), ForeignKey("users.username"), index=True, nullable=False)
	to_username = Column(String(64), ForeignKey("users.username"), index=True, nullable=False)
	body = Column(Text, nullable=False)
	sent_at = Column(DateTime, default=utcnow, index=True, nullable=False)
	read_at = Column(DateTime)

	from_user = relationship("User", foreign_keys=[from_username], back_populates="sent_messages")
	to_user = relationship("User", foreign_keys=[to_username], back_populates="received_messages")

Index("ix_messages_pair_time", Message.from_username, Message.to_username, Message.sent_at)
