import logging
import sys

from ax_snapshot.config import CONFIG

LOG_FORMAT = '%(levelname)-8s [%(name)s] %(message)s'


def setup_logging(log_level: str | None = None) -> logging.Logger:
	"""Attach a single stream handler to the ax_snapshot logger.

	Calling this again only updates the level.
	"""
	level_name = (log_level or CONFIG.AX_SNAPSHOT_LOGGING_LEVEL).upper()
	level = logging.getLevelName(level_name)
	if not isinstance(level, int):
		raise ValueError(f'Unknown logging level: {level_name}')

	package_logger = logging.getLogger('ax_snapshot')
	package_logger.setLevel(level)

	if not any(getattr(handler, '_ax_snapshot_handler', False) for handler in package_logger.handlers):
		handler = logging.StreamHandler(sys.stdout)
		handler.setFormatter(logging.Formatter(LOG_FORMAT))
		handler._ax_snapshot_handler = True  # type: ignore[attr-defined]
		package_logger.addHandler(handler)
	package_logger.propagate = False

	# Disable noisy logging
	for third_party in ('cdp_use', 'cdp_use.client', 'websockets'):
		logging.getLogger(third_party).setLevel(logging.WARNING)

	return package_logger
