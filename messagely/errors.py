"""Error taxonomy and the result type returned by the repositories."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class AppError(Exception):
	status: int = 500
	default_message: str = "Internal server error"

	def __init__(self, message: Optional[str] = None, status: Optional[int] = None) -> None:
		self.message = message or self.default_message
		if status is not None:
			self.status = status
		super().__init__(self.message)

	def to_dict(self) -> dict:
		return {"error": {"message": self.message, "status": self.status}}


class ValidationError(AppError):
	status = 400
	default_message = "Invalid request"


class AuthError(AppError):
	status = 400
	default_message = "Invalid username/password"


class ConflictError(AppError):
	status = 400
	default_message = "Username taken."


class NotFoundError(AppError):
	status = 404
	default_message = "Not found"


class StoreError(AppError):
	status = 500
	default_message = "Database error"


@dataclass(frozen=True)
class Result(Generic[T]):
	"""Either a value or the error that prevented producing one."""

	value: Optional[T] = None
	error: Optional[AppError] = None

	@property
	def ok(self) -> bool:
		return self.error is None

	def unwrap(self) -> T:
		if self.error is not None:
			raise self.error
		return self.value


def success(value: Optional[T] = None) -> Result[T]:
	return Result(value=value)


def failure(error: AppError) -> Result:
	return Result(error=error)
