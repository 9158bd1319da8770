from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional


class LoginIn(BaseModel):
	username: Optional[str] = None
	password: Optional[str] = None


class RegisterIn(LoginIn):
	username: Optional[str] = Field(default=None, max_length=64)
	password: Optional[str] = Field(default=None, max_length=128)
	first_name: Optional[str] = Field(default=None, max_length=128)
	last_name: Optional[str] = Field(default=None, max_length=128)
	phone: Optional[str] = Field(default=None, max_length=32)


class LoginOut(BaseModel):
	message: str = "Logged in!"


class RegisterOut(BaseModel):
	username: str


class UserSummary(BaseModel):
	username: str
	first_name: Optional[str] = None
	last_name: Optional[str] = None
	phone: Optional[str] = None

	class Config:
		from_attributes = True


class UserDetail(UserSummary):
	join_at: datetime
	last_login_at: Optional[datetime] = None


class MessageCreate(BaseModel):
	from_username: Optional[str] = None
	to_username: Optional[str] = None
	body: Optional[str] = None


class MessageOut(BaseModel):
	id: int
	from_username: str
	to_username: str
	body: str
	sent_at: datetime
	read_at: Optional[datetime] = None

	class Config:
		from_attributes = True


class SentMessage(BaseModel):
	"""A message as seen by its sender: the recipient is embedded."""

	id: int
	to_user: UserSummary
	body: str
	sent_at: datetime
	read_at: Optional[datetime] = None

	class Config:
		from_attributes = True


class ReceivedMessage(BaseModel):
	"""A message as seen by its recipient: the sender is embedded."""

	id: int
	from_user: UserSummary
	body: str
	sent_at: datetime
	read_at: Optional[datetime] = None

	class Config:
		from_attributes = True


class MessageDetail(BaseModel):
	id: int
	from_user: UserSummary
	to_user: UserSummary
	body: str
	sent_at: datetime
	read_at: Optional[datetime] = None

	class Config:
		from_attributes = True


class MessageRead(BaseModel):
	id: int
	read_at: datetime

	class Config:
		from_attributes = True
