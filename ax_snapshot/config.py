"""Configuration for ax-snapshot, read lazily from the environment."""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
	return os.getenv(name, default).strip().lower()[:1] in ('t', 'y', '1')


class Config:
	"""Every access re-reads os.environ so tests and callers can change settings at runtime."""

	@property
	def AX_SNAPSHOT_LOGGING_LEVEL(self) -> str:
		return os.getenv('AX_SNAPSHOT_LOGGING_LEVEL', 'info').strip().lower()

	@property
	def AX_SNAPSHOT_SETUP_LOGGING(self) -> bool:
		return _env_flag('AX_SNAPSHOT_SETUP_LOGGING', 'true')

	@property
	def AX_SNAPSHOT_INTERESTING_ONLY(self) -> bool:
		return _env_flag('AX_SNAPSHOT_INTERESTING_ONLY', 'true')


CONFIG = Config()
