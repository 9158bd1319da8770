import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .database import get_db, init_db
from .errors import AppError, ValidationError
from .repositories import UserRepository
from .routes import require, router as public_router
from .schemas import LoginIn, LoginOut, RegisterIn, RegisterOut


logging.basicConfig(
	level=settings.LOG_LEVEL,
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

init_db()

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.ALLOWED_ORIGINS,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

app.include_router(public_router)


def error_response(message: str, status: int, headers: Optional[dict] = None) -> JSONResponse:
	return JSONResponse(
		status_code=status,
		content={"error": {"message": message, "status": status}},
		headers=headers,
	)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
	if exc.status >= 500:
		logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
	return JSONResponse(status_code=exc.status, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
	errors = exc.errors()
	detail = errors[0].get("msg") if errors else ValidationError.default_message
	return error_response(detail, ValidationError.status)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
	return error_response(str(exc.detail), exc.status_code, headers=getattr(exc, "headers", None))


@app.get("/", response_class=PlainTextResponse)
def root():
	return "APP IS WORKING!!"


@app.post("/login", response_model=LoginOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
	require("Username and password required", payload.username, payload.password)
	UserRepository(db).login(payload.username, payload.password).unwrap()
	return LoginOut()


@app.post("/register", response_model=RegisterOut)
def register_user(payload: RegisterIn, db: Session = Depends(get_db)):
	require("Username and password required", payload.username, payload.password)
	user = UserRepository(db).register(
		payload.username,
		payload.password,
		first_name=payload.first_name,
		last_name=payload.last_name,
		phone=payload.phone,
	).unwrap()
	return RegisterOut(username=user.username)
