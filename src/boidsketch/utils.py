"""
utils.py

Small shared helpers:
- `safe_log_exception(msg, exc, **ctx)` : logs exceptions robustly
- `configure_logging(level)` : console handler for the ``boidsketch`` logger
- `random_range(lo, hi, whole=False, rng=None)` : uniform sample in [lo, hi)

"""

from typing import Any, Optional
import sys
import logging
import numpy as np

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(levelname)s] %(message)s"


def safe_log_exception(msg: str, exc: Exception, **ctx: Any) -> None:
	"""Log an exception robustly.

	Attempts to call `logger.exception`. If logging fails for any reason,
	falls back to writing a compact message to `sys.stderr`.
	"""
	try:
		if ctx:
			ctx_s = ' | '.join(f"{k}={v!r}" for k, v in ctx.items())
			logger.exception('%s | %s | %s', msg, exc, ctx_s)
		else:
			logger.exception('%s | %s', msg, exc)
	except Exception:
		try:
			sys.stderr.write(f'LOGGING FAILURE: {msg} {exc}\n')
		except Exception:
			pass


def configure_logging(level: Any = logging.INFO) -> logging.Logger:
	"""Attach a single stdout handler to the package logger.

	Safe to call repeatedly; an existing handler is reused and only the
	level is updated.
	"""
	if isinstance(level, str):
		level = getattr(logging, level.upper(), logging.INFO)
	log = logging.getLogger("boidsketch")
	if not log.handlers:
		h = logging.StreamHandler(sys.stdout)
		h.setFormatter(logging.Formatter(LOG_FORMAT))
		log.addHandler(h)
	for h in log.handlers:
		h.setLevel(level)
	log.setLevel(level)
	return log


def random_range(lo: float, hi: float, whole: bool = False, rng: Optional[np.random.Generator] = None):
	"""Uniform sample between `lo` (inclusive) and `hi` (exclusive).

	With `whole=True` the sample is rounded to the nearest int, so `hi`
	itself can come back.
	"""
	if rng is None:
		rng = np.random.default_rng()
	value = rng.random() * (hi - lo) + lo
	if whole:
		return int(round(value))
	return float(value)
