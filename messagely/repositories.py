import functools
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from .auth import hash_password, verify_password
from .errors import AuthError, ConflictError, NotFoundError, Result, StoreError, failure, success
from .models import Message, User, utcnow
from .schemas import (
	MessageDetail,
	MessageOut,
	MessageRead,
	ReceivedMessage,
	SentMessage,
	UserDetail,
	UserSummary,
)


logger = logging.getLogger(__name__)


def store_guard(method):
	"""Turn unexpected database failures into a StoreError result."""

	@functools.wraps(method)
	def wrapper(self, *args, **kwargs):
		try:
			return method(self, *args, **kwargs)
		except SQLAlchemyError as exc:
			self.db.rollback()
			logger.error("%s failed: %s", method.__qualname__, exc, exc_info=True)
			return failure(StoreError())

	return wrapper


class UserRepository:
	def __init__(self, db: Session):
		self.db = db

	@store_guard
	def register(
		self,
		username: str,
		password: str,
		first_name: Optional[str] = None,
		last_name: Optional[str] = None,
		phone: Optional[str] = None,
	) -> Result[UserSummary]:
		if self.db.get(User, username) is not None:
			logger.warning("Registration rejected, username %r already exists", username)
			return failure(ConflictError())
		user = User(
			username=username,
			password=hash_password(password),
			first_name=first_name,
			last_name=last_name,
			phone=phone,
		)
		self.db.add(user)
		try:
			self.db.commit()
		except IntegrityError:
			# lost a race against a concurrent registration
			self.db.rollback()
			logger.warning("Registration rejected, username %r already exists", username)
			return failure(ConflictError())
		self.db.refresh(user)
		logger.info("Registered user %r", username)
		return success(UserSummary.model_validate(user))

	@store_guard
	def authenticate(self, username: str, password: str) -> Result[bool]:
		user = self.db.get(User, username)
		if user is None or not verify_password(password, user.password):
			logger.warning("Failed login for %r", username)
			return failure(AuthError())
		return success(True)

	@store_guard
	def update_login_timestamp(self, username: str) -> Result[None]:
		user = self.db.get(User, username)
		if user is None:
			return failure(NotFoundError(f"No such user: {username}"))
		user.last_login_at = utcnow()
		self.db.commit()
		return success(None)

	def login(self, username: str, password: str) -> Result[bool]:
		result = self.authenticate(username, password)
		if not result.ok:
			return result
		stamped = self.update_login_timestamp(username)
		if not stamped.ok:
			return stamped
		logger.info("User %r logged in", username)
		return result

	@store_guard
	def all(self) -> Result[List[UserSummary]]:
		users = self.db.query(User).order_by(User.username.asc()).all()
		return success([UserSummary.model_validate(u) for u in users])

	@store_guard
	def get(self, username: str) -> Result[UserDetail]:
		user = self.db.get(User, username)
		if user is None:
			return failure(NotFoundError(f"No such user: {username}"))
		return success(UserDetail.model_validate(user))


class MessageRepository:
	def __init__(self, db: Session):
		self.db = db

	@store_guard
	def messages_from(self, username: str) -> Result[List[SentMessage]]:
		messages = (
			self.db.query(Message)
			.options(joinedload(Message.to_user))
			.filter(Message.from_username == username)
			.order_by(Message.sent_at.asc(), Message.id.asc())
			.all()
		)
		return success([SentMessage.model_validate(m) for m in messages])

	@store_guard
	def messages_to(self, username: str) -> Result[List[ReceivedMessage]]:
		messages = (
			self.db.query(Message)
			.options(joinedload(Message.from_user))
			.filter(Message.to_username == username)
			.order_by(Message.sent_at.asc(), Message.id.asc())
			.all()
		)
		return success([ReceivedMessage.model_validate(m) for m in messages])

	@store_guard
	def create(self, from_username: str, to_username: str, body: str) -> Result[MessageOut]:
		for username in (from_username, to_username):
			if self.db.get(User, username) is None:
				return failure(NotFoundError(f"No such user: {username}"))
		message = Message(from_username=from_username, to_username=to_username, body=body)
		self.db.add(message)
		self.db.commit()
		self.db.refresh(message)
		logger.info("Message %d sent from %r to %r", message.id, from_username, to_username)
		return success(MessageOut.model_validate(message))

	def _load(self, message_id: int) -> Optional[Message]:
		return (
			self.db.query(Message)
			.options(joinedload(Message.from_user), joinedload(Message.to_user))
			.filter(Message.id == message_id)
			.first()
		)

	@store_guard
	def get(self, message_id: int) -> Result[MessageDetail]:
		message = self._load(message_id)
		if message is None:
			return failure(NotFoundError(f"No such message: {message_id}"))
		return success(MessageDetail.model_validate(message))

	@store_guard
	def mark_read(self, message_id: int) -> Result[MessageRead]:
		message = self.db.get(Message, message_id)
		if message is None:
			return failure(NotFoundError(f"No such message: {message_id}"))
		if message.read_at is None:
			message.read_at = utcnow()
			self.db.commit()
		return success(MessageRead.model_validate(message))
