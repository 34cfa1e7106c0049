# app/core/logging.py
"""
Logging da Perfiles API.

Features:
- Cores por nível (consola)
- Ficheiro diário com retenção configurável
- Request ID em todas as linhas
- log_timing para medir operações de store
"""

import logging
import os
import re
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timedelta
from logging.handlers import TimedRotatingFileHandler

from dotenv import load_dotenv

load_dotenv()

# -------- request-id ----------
_request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

RESET = "\033[0m"
DIM = "\033[2m"
BRIGHT_BLUE = "\033[94m"

# Level -> (color, short_name)
LEVEL_STYLES = {
    logging.DEBUG: ("\033[36m", "DBG"),
    logging.INFO: ("\033[32m", "INF"),
    logging.WARNING: ("\033[33m", "WRN"),
    logging.ERROR: ("\033[31m", "ERR"),
    logging.CRITICAL: ("\033[1m\033[91m", "CRT"),
}


def _short_name(name: str) -> str:
    for prefix in ("app.", "pfl."):
        if name.startswith(prefix):
            name = name[len(prefix) :]
            break
    name = name.replace(".usecases.", ".").replace(".services.", ".")
    return name.replace("domains.", "").replace("api.v1.", "api.")


class RequestIdFilter(logging.Filter):
    """Adds request_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id_ctx.get() or "-"
        return True


class ColoredFormatter(logging.Formatter):
    """
    Format: HH:MM:SS.mmm | LEVEL | logger.name | [rid] | message
    """

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and _supports_color()

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        time_str = dt.strftime("%H:%M:%S") + f".{int(record.msecs):03d}"
        color, short_level = LEVEL_STYLES.get(record.levelno, ("", record.levelname[:3]))
        name = _short_name(record.name)
        rid = getattr(record, "request_id", "-")

        if self.use_colors:
            parts = [
                f"{DIM}{time_str}{RESET}",
                f"{color}{short_level:>3}{RESET}",
                f"{BRIGHT_BLUE}{name:<25}{RESET}",
                f"{DIM}[{rid}]{RESET}",
                record.getMessage(),
            ]
        else:
            parts = [time_str, f"{short_level:>3}", f"{name:<25}", f"[{rid}]", record.getMessage()]

        formatted = " | ".join(parts)
        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)
        return formatted


class FileFormatter(logging.Formatter):
    """
    Format: YYYY-MM-DD HH:MM:SS.mmm | LEVEL | logger | [rid] | message
    """

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        time_str = dt.strftime("%Y-%m-%d %H:%M:%S") + f".{int(record.msecs):03d}"
        rid = getattr(record, "request_id", "-")
        name = _short_name(record.name)

        formatted = (
            f"{time_str} | {record.levelname[:3]:>3} | {name:<25} | [{rid}] | {record.getMessage()}"
        )
        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)
        return formatted


def _supports_color() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


# -------- Request ID helpers ----------
def get_request_id() -> str | None:
    return _request_id_ctx.get()


def get_request_id_or(default: str = "-") -> str:
    rid = _request_id_ctx.get()
    return rid if rid else default


def set_request_id(rid: str | None) -> None:
    _request_id_ctx.set(rid)


# -------- Log rotation helpers ----------
_DATE_SUFFIX = "%Y-%m-%d"
_LOG_RE = re.compile(r"^(?P<base>.+)\.log\.(?P<date>\d{4}-\d{2}-\d{2})$")


def _purge_old_logs(log_dir: str, base_name: str, days: int = 30) -> int:
    """Delete log files older than N days."""
    cutoff = (datetime.now() - timedelta(days=days)).date()
    removed = 0
    for fname in os.listdir(log_dir):
        m = _LOG_RE.match(fname)
        if not m or not m.group("base").endswith(base_name):
            continue
        try:
            dt = datetime.strptime(m.group("date"), _DATE_SUFFIX).date()
        except ValueError:
            continue
        if dt < cutoff:
            try:
                os.remove(os.path.join(log_dir, fname))
                removed += 1
            except OSError:
                logging.getLogger("pfl.logging").warning("Could not remove old log %s", fname)
    return removed


# -------- Timing helpers ----------
@contextmanager
def log_timing(operation: str, logger: logging.Logger | str | None = None, **context):
    """
    Context manager que regista a duração de uma operação.

        with log_timing("filter_profiles", page=1, limit=20):
            ...

    -> filter_profiles starting (page=1, limit=20)
    <- filter_profiles done in 12.3ms (page=1, limit=20)
    """
    if isinstance(logger, str):
        logger = logging.getLogger(logger)
    elif logger is None:
        logger = logging.getLogger("pfl.timing")

    ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
    ctx_display = f" ({ctx_str})" if ctx_str else ""

    logger.debug("-> %s starting%s", operation, ctx_display)
    t0 = time.perf_counter()
    try:
        yield
    except Exception as e:
        duration_ms = (time.perf_counter() - t0) * 1000
        logger.error("<- %s FAILED in %.1fms: %s%s", operation, duration_ms, e, ctx_display)
        raise
    duration_ms = (time.perf_counter() - t0) * 1000
    logger.info("<- %s done in %.1fms%s", operation, duration_ms, ctx_display)


# -------- Main setup ----------
def setup_logging() -> None:
    """Configure logging for the application."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_dir = os.getenv("LOG_DIR", os.path.join(os.getcwd(), "logs"))
    base_name = os.getenv("LOG_BASENAME", "pfl")
    retention_days = int(os.getenv("LOG_RETENTION_DAYS", "30"))
    use_colors = os.getenv("LOG_COLORS", "true").lower() in ("true", "1", "yes")

    os.makedirs(log_dir, exist_ok=True)
    logfile = os.path.join(log_dir, f"{base_name}.log")

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(ColoredFormatter(use_colors=use_colors))
    console.addFilter(RequestIdFilter())

    fileh = TimedRotatingFileHandler(
        filename=logfile,
        when="midnight",
        backupCount=retention_days,
        encoding="utf-8",
        delay=True,
    )
    fileh.suffix = _DATE_SUFFIX
    fileh.setFormatter(FileFormatter())
    fileh.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(console)
    root.addHandler(fileh)

    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(os.getenv("HTTPX_LOG_LEVEL", "WARNING").upper())
    logging.getLogger("sqlalchemy.engine").setLevel(os.getenv("SQL_LOG_LEVEL", "WARNING").upper())

    removed = _purge_old_logs(log_dir, base_name, days=retention_days)
    if removed:
        logging.getLogger("pfl.logging").info("Purged %d old log file(s)", removed)

    logging.getLogger("pfl.logging").debug(
        "Logging initialized: level=%s, colors=%s", level, use_colors
    )
