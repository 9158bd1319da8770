from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings


def _engine_options(url: str) -> dict:
	options = {"echo": settings.SQL_ECHO}
	if url.startswith("sqlite"):
		options["connect_args"] = {"check_same_thread": False}
		# in-memory databases only live as long as their connection
		if url in ("sqlite://", "sqlite:///:memory:"):
			options["poolclass"] = StaticPool
	return options


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(
	autocommit=False,
	autoflush=False,
	bind=engine,
)

Base = declarative_base()


def init_db() -> None:
	from . import models  # noqa: F401

	Base.metadata.create_all(bind=engine)


def get_db():
	db = SessionLocal()
	try:
		yield db
	finally:
		db.close()
