"""Run configuration: filters, sort strategy and engine switches.

``SortConfig`` is built once, from the optional YAML file plus CLI overrides,
and is frozen afterwards so worker threads can share it without locking.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field

from sortpar.utils import validate_config


class Filter(str, Enum):
    STRIP_LEADING_BLANKS = "leading_blanks"
    DICTIONARY_ORDER = "dictionary_order"
    CASE_FOLD = "fold"


class SortStrategy(str, Enum):
    LEXICOGRAPHIC = "lexicographic"
    GENERAL_NUMERIC = "general_numeric"
    NATURAL_ORDER = "human_numeric"
    VERSION_ORDER = "version"


# order used when filters are switched on by independent flags
FLAG_FILTER_ORDER: Tuple[Filter, ...] = (
    Filter.STRIP_LEADING_BLANKS,
    Filter.DICTIONARY_ORDER,
    Filter.CASE_FOLD,
)


class SortConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    filters: Tuple[Filter, ...] = ()
    strategy: SortStrategy = SortStrategy.LEXICOGRAPHIC
    reverse: bool = False
    stable: bool = False
    unique: bool = False
    parallel: Optional[int] = Field(default=None, ge=1)


def load_config(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    validate_config(cfg)
    return cfg


def _apply_overrides(sort_cfg: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> None:
    if not overrides:
        return

    flagged = [f for f in FLAG_FILTER_ORDER if overrides.get(f.value)]
    if flagged:
        existing = [Filter(f) for f in sort_cfg.get("filters", [])]
        sort_cfg["filters"] = existing + [f for f in flagged if f not in existing]

    if overrides.get("strategy") is not None:
        sort_cfg["strategy"] = overrides["strategy"]
    for flag in ("reverse", "stable", "unique"):
        if overrides.get(flag):
            sort_cfg[flag] = True
    if overrides.get("parallel") is not None:
        sort_cfg["parallel"] = int(overrides["parallel"])  # type: ignore[arg-type]


def build_sort_config(cfg: Optional[Dict[str, Any]] = None, overrides: Optional[Dict[str, Any]] = None) -> SortConfig:
    """Merge the ``sort`` section of a config dict with CLI overrides."""
    sort_cfg = dict((cfg or {}).get("sort") or {})
    _apply_overrides(sort_cfg, overrides)
    return SortConfig(
        filters=tuple(Filter(f) for f in sort_cfg.get("filters", [])),
        strategy=SortStrategy(sort_cfg.get("strategy", SortStrategy.LEXICOGRAPHIC)),
        reverse=bool(sort_cfg.get("reverse", False)),
        stable=bool(sort_cfg.get("stable", False)),
        unique=bool(sort_cfg.get("unique", False)),
        parallel=sort_cfg.get("parallel"),
    )


def output_path(cfg: Optional[Dict[str, Any]], override: Optional[str] = None) -> Optional[str]:
    if override:
        return override
    return ((cfg or {}).get("output") or {}).get("path")
