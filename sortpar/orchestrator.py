import time
import uuid
from typing import Any, Dict, List, Optional, Sequence

from sortpar.config import SortConfig, build_sort_config, load_config, output_path
from sortpar.stages.engine import sort
from sortpar.utils import get_logger, read_lines, write_lines

logger = get_logger(__name__)


def _execute_pipeline(paths: Sequence[str], config: SortConfig, output: Optional[str]) -> List[str]:
    """Read, sort and write once."""
    logger.info(
        "config strategy=%s filters=%s reverse=%s stable=%s unique=%s",
        config.strategy.value,
        [f.value for f in config.filters],
        config.reverse,
        config.stable,
        config.unique,
    )

    t0 = time.monotonic()
    lines = read_lines(paths)
    logger.info("read lines=%d inputs=%d took_ms=%d", len(lines), len(paths) or 1, int((time.monotonic()-t0)*1000))

    t1 = time.monotonic()
    sort(lines, config)
    logger.info("sorted lines=%d took_ms=%d", len(lines), int((time.monotonic()-t1)*1000))

    t2 = time.monotonic()
    write_lines(lines, output)
    logger.info("written dest=%s took_ms=%d", output or "<stdout>", int((time.monotonic()-t2)*1000))
    return lines


def run_once(
    paths: Sequence[str] = (),
    *,
    config: Optional[SortConfig] = None,
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    output: Optional[str] = None,
) -> List[str]:
    """Sort the given inputs once and return the lines as written.

    ``config`` wins when given; otherwise the YAML at ``config_path`` (if any)
    is merged with ``overrides``.
    """
    run_id = uuid.uuid4().hex[:8]
    logger.info("=== run start id=%s ===", run_id)

    try:
        cfg = load_config(config_path) if config_path else {}
        if config is None:
            config = build_sort_config(cfg, overrides)
        return _execute_pipeline(list(paths), config, output_path(cfg, output))
    except Exception as e:
        logger.error("error running sortpar: %s", e)
        raise
    finally:
        logger.info("=== run end id=%s ===", run_id)
