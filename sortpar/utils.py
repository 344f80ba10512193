import os
import sys
import json
import datetime as dt
import functools
import logging
from logging.handlers import TimedRotatingFileHandler
from typing import Iterable, List, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

STDIN_FILENAME = "-"

# ---------- Config validation ----------

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schemas", "config.schema.json")

@functools.lru_cache(maxsize=1)
def _config_validator() -> Draft202012Validator:
    with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
        schema = json.load(f)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)

def validate_config(cfg: dict):
    """Raise ``ValueError`` naming the most relevant schema violation in ``cfg``."""
    error = best_match(_config_validator().iter_errors(cfg))
    if error is not None:
        where = "/".join(str(p) for p in error.absolute_path) or "<root>"
        raise ValueError(f"Config validation error: {error.message} at {where}")

# ---------- Input reader ----------

def _split_records(data: bytes) -> List[bytes]:
    records = data.split(b"\n")
    if records and records[-1] == b"":
        records.pop()
    return [r[:-1] if r.endswith(b"\r") else r for r in records]

def decode_lines(data: bytes) -> List[str]:
    """Decode newline-separated records as UTF-8.

    Records that are not valid UTF-8 are dropped rather than failing the read.
    """
    lines: List[str] = []
    dropped = 0
    for raw in _split_records(data):
        try:
            lines.append(raw.decode("utf-8"))
        except UnicodeDecodeError:
            dropped += 1
    if dropped:
        get_logger(__name__).debug("dropped undecodable lines=%d", dropped)
    return lines

def read_lines(paths: Optional[Iterable[str]] = None) -> List[str]:
    """Read every input in order; no paths (or ``-``) means standard input."""
    paths = list(paths or [])
    if not paths:
        paths = [STDIN_FILENAME]

    lines: List[str] = []
    for path in paths:
        if path == STDIN_FILENAME:
            lines.extend(decode_lines(sys.stdin.buffer.read()))
        else:
            with open(path, "rb") as f:
                lines.extend(decode_lines(f.read()))
    return lines

# ---------- Output writer ----------

def _write(lines: Iterable[str], out) -> None:
    for line in lines:
        out.write(line)
        out.write("\n")

def write_lines(lines: Iterable[str], path: Optional[str] = None) -> None:
    if path:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            _write(lines, f)
        return
    _write(lines, sys.stdout)
    sys.stdout.flush()

# ---------- Logging ----------

_LOGGER_INITIALIZED = False

class JsonFormatter(logging.Formatter):
    """One JSON object per line; ``thread`` tells the sort workers apart."""

    def format(self, record):
        created = dt.datetime.fromtimestamp(record.created, dt.timezone.utc)
        line = {
            "ts": created.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False)

def _build_logger():
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    # stdout carries the sorted output, so default to a quiet stderr
    level = os.getenv("LOG_LEVEL", "WARNING").upper()
    log_dir = os.getenv("LOG_DIR")
    json_mode = os.getenv("LOG_JSON", "false").lower() == "true"

    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level, logging.WARNING))

    if json_mode:
        fmt = JsonFormatter()
    else:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

    ch = logging.StreamHandler()
    ch.setLevel(logger.level)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = TimedRotatingFileHandler(os.path.join(log_dir, "sortpar.log"), when="D", backupCount=7, encoding="utf-8")
        fh.setLevel(logger.level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    _LOGGER_INITIALIZED = True

def get_logger(name: str = None) -> logging.Logger:
    _build_logger()
    return logging.getLogger(name if name else __name__)
