from datetime import datetime, timedelta, timezone
from typing import Literal, Optional
import logging
import uuid

from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import OAuth2PasswordRequestForm, OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, Field

from ..settings import settings
from sqlalchemy.orm import Session
from ..db import get_db
from ..models import User as UserRow, AuthSession

router = APIRouter(prefix="/api/auth", tags=["auth"])

logger = logging.getLogger(__name__)
logging.getLogger('passlib').setLevel(logging.ERROR)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


class Token(BaseModel):
	access_token: str
	token_type: str = "bearer"


class User(BaseModel):
	id: int
	name: str
	email: str
	role: str


class AuthResponse(BaseModel):
	token: str
	user: User


def _to_user(row: UserRow) -> User:
	return User(id=row.id, name=row.name, email=row.email, role=row.role)


def _bcrypt_safe(password: str) -> str:
	# Truncate password to 72 bytes for bcrypt compatibility
	password_bytes = password.encode('utf-8')
	if len(password_bytes) > 72:
		password_bytes = password_bytes[:72]
	return password_bytes.decode('utf-8', errors='ignore')


def hash_password(password: str) -> str:
	return pwd_context.hash(_bcrypt_safe(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
	return pwd_context.verify(_bcrypt_safe(plain_password), hashed_password)


def authenticate_user(db: Session, email: str, password: str) -> Optional[UserRow]:
	user_row = db.query(UserRow).filter(UserRow.email == email.strip().lower()).first()
	if user_row and verify_password(password, user_row.password_hash):
		return user_row
	return None


def _resolve_expiry(expires_delta: Optional[timedelta]) -> datetime:
	"""Return a safe JWT expiry timestamp.

	Uses the configured token lifetime when no explicit delta is given and
	falls back to 7 days for a non-positive setting.
	"""
	delta = expires_delta
	if delta is None:
		minutes = settings.access_token_expire_minutes
		if minutes > 0:
			delta = timedelta(minutes=minutes)
		else:
			delta = timedelta(days=7)
	now = datetime.now(timezone.utc)
	try:
		return now + delta
	except OverflowError:
		# Cap at far future but within datetime bounds
		return datetime.max.replace(tzinfo=timezone.utc)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
	to_encode = data.copy()
	expire = _resolve_expiry(expires_delta)
	to_encode.update({"exp": expire})
	encoded_jwt = jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
	return encoded_jwt


def issue_token(db: Session, user_row: UserRow) -> str:
	"""Open a server-side auth session and return a bearer token bound to it."""
	session_id = uuid.uuid4().hex
	access_token = create_access_token({"sub": str(user_row.id), "role": user_row.role, "jti": session_id})
	db.add(AuthSession(session_id=session_id, user_id=user_row.id))
	db.commit()
	return access_token


def _decode_token(token: str) -> tuple[int, str]:
	credentials_exception = HTTPException(status_code=401, detail="Could not validate credentials")
	try:
		payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
		sub: str | None = payload.get("sub")
		jti: str | None = payload.get("jti")
		if sub is None or jti is None:
			raise credentials_exception
		return int(sub), jti
	except (JWTError, ValueError):
		raise credentials_exception


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
	credentials_exception = HTTPException(status_code=401, detail="Could not validate credentials")
	user_id, jti = _decode_token(token)
	# The session row must still exist, so logged-out tokens are rejected
	row = db.get(AuthSession, jti)
	if not row or row.user_id != user_id:
		raise credentials_exception
	user_row = db.get(UserRow, user_id)
	if not user_row:
		raise credentials_exception
	row.last_activity_at = datetime.utcnow()
	db.add(row)
	db.commit()
	return _to_user(user_row)


def require_admin(user: User = Depends(get_current_user)) -> User:
	if user.role != "admin":
		raise HTTPException(status_code=403, detail="Admin access required")
	return user


class RegisterRequest(BaseModel):
	name: str = Field(min_length=1, max_length=128)
	email: str = Field(min_length=3, max_length=256)
	password: str = Field(min_length=1)
	role: Literal["student", "admin"] = "student"


class LoginRequest(BaseModel):
	email: str
	password: str


@router.post("/register", status_code=201)
async def register(req: RegisterRequest, db: Session = Depends(get_db)):
	name = req.name.strip()
	email = req.email.strip().lower()
	if not name or "@" not in email:
		raise HTTPException(status_code=400, detail="name and a valid email are required")
	if req.role == "admin" and not settings.allow_admin_signup:
		raise HTTPException(status_code=403, detail="Admin registration is disabled")
	existing = db.query(UserRow).filter(UserRow.email == email).first()
	if existing:
		raise HTTPException(status_code=400, detail="User already exists")
	row = UserRow(name=name, email=email, password_hash=hash_password(req.password), role=req.role)
	db.add(row)
	db.commit()
	db.refresh(row)
	logger.info("Registered user %s (%s)", row.id, row.role)
	token = issue_token(db, row)
	return {"message": "User registered successfully", "token": token, "user": _to_user(row)}


@router.post("/login", response_model=AuthResponse)
async def login(req: LoginRequest, db: Session = Depends(get_db)):
	user_row = authenticate_user(db, req.email, req.password)
	if not user_row:
		raise HTTPException(status_code=401, detail="Invalid credentials")
	return AuthResponse(token=issue_token(db, user_row), user=_to_user(user_row))


@router.post("/token", response_model=Token)
async def token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
	user_row = authenticate_user(db, form_data.username, form_data.password)
	if not user_row:
		raise HTTPException(status_code=401, detail="Incorrect username or password")
	return Token(access_token=issue_token(db, user_row))


@router.get("/me", response_model=User)
async def me(user: User = Depends(get_current_user)):
	return user


@router.post("/logout")
async def logout(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)):
	user_id, jti = _decode_token(token)
	row = db.get(AuthSession, jti)
	if not row or row.user_id != user_id:
		raise HTTPException(status_code=401, detail="Could not validate credentials")
	db.delete(row)
	db.commit()
	return {"message": "Logged out"}
