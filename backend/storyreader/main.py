import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .db import Base, engine, SessionLocal
from .logging_config import setup_logging
from .seed import seed_database
from .settings import settings
from .routers import health
from .routers import auth
from .routers import stories
from .routers import sessions

logger = logging.getLogger(__name__)

app = FastAPI(title="Story Reader API")
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_origin_list(),
	allow_credentials=False,
	allow_methods=["*"],
	allow_headers=["*"],
)
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(stories.router)
app.include_router(sessions.router)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
	logger.exception("Database error on %s %s", request.method, request.url.path)
	return JSONResponse(status_code=500, content={"detail": "Server error"})


@app.on_event("startup")
async def startup_event():
	setup_logging()
	# Initialize DB schema
	Base.metadata.create_all(bind=engine)
	if settings.seed_on_startup:
		db = SessionLocal()
		try:
			seed_database(db)
		except SQLAlchemyError:
			logger.exception("Seeding failed; continuing without sample data")
		finally:
			db.close()
	logger.info("Story Reader API ready")
