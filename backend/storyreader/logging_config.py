import logging

from .settings import settings


def setup_logging() -> None:
	level = (settings.log_level or "INFO").upper()

	logging.basicConfig(
		level=getattr(logging, level, logging.INFO),
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
