from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .database import get_db
from .errors import ValidationError
from .repositories import MessageRepository, UserRepository
from .schemas import (
	MessageCreate,
	MessageDetail,
	MessageOut,
	MessageRead,
	ReceivedMessage,
	SentMessage,
	UserDetail,
	UserSummary,
)


router = APIRouter()


def require(message: str, *values) -> None:
	"""Reject the request unless every value is a non-empty string."""
	if not all(values):
		raise ValidationError(message)


@router.get("/users", response_model=List[UserSummary])
def list_users(db: Session = Depends(get_db)):
	return UserRepository(db).all().unwrap()


@router.get("/users/{username}", response_model=UserDetail)
def get_user(username: str, db: Session = Depends(get_db)):
	return UserRepository(db).get(username).unwrap()


@router.get("/users/{username}/to", response_model=List[ReceivedMessage])
def messages_to_user(username: str, db: Session = Depends(get_db)):
	return MessageRepository(db).messages_to(username).unwrap()


@router.get("/users/{username}/from", response_model=List[SentMessage])
def messages_from_user(username: str, db: Session = Depends(get_db)):
	return MessageRepository(db).messages_from(username).unwrap()


@router.post("/messages", response_model=MessageOut)
def send_message(payload: MessageCreate, db: Session = Depends(get_db)):
	require("from_username, to_username and body required", payload.from_username, payload.to_username, payload.body)
	return MessageRepository(db).create(payload.from_username, payload.to_username, payload.body).unwrap()


@router.get("/messages/{message_id}", response_model=MessageDetail)
def get_message(message_id: int, db: Session = Depends(get_db)):
	return MessageRepository(db).get(message_id).unwrap()


@router.post("/messages/{message_id}/read", response_model=MessageRead)
def mark_message_read(message_id: int, db: Session = Depends(get_db)):
	return MessageRepository(db).mark_read(message_id).unwrap()
