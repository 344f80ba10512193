import pydantic
import pytest

from sortpar.config import Filter, SortConfig, SortStrategy, build_sort_config, load_config, output_path


def test_default_config():
    cfg = build_sort_config()
    assert cfg == SortConfig()
    assert cfg.filters == ()
    assert cfg.strategy == SortStrategy.LEXICOGRAPHIC
    assert not (cfg.reverse or cfg.stable or cfg.unique)


def test_sort_config_is_frozen():
    cfg = SortConfig()
    with pytest.raises(pydantic.ValidationError):
        cfg.reverse = True


def test_flag_filters_use_fixed_order():
    cfg = build_sort_config(None, {"fold": True, "leading_blanks": True, "dictionary_order": False})
    assert cfg.filters == (Filter.STRIP_LEADING_BLANKS, Filter.CASE_FOLD)


def test_yaml_filters_keep_listed_order(tmp_path):
    path = tmp_path / "sort.yaml"
    path.write_text(
        "sort:\n"
        "  filters: [fold, leading_blanks]\n"
        "  strategy: version\n"
        "  stable: true\n"
        "  parallel: 2\n"
        "output:\n"
        "  path: out.txt\n",
        encoding="utf-8",
    )
    raw = load_config(str(path))
    cfg = build_sort_config(raw, {"dictionary_order": True, "fold": True, "reverse": True})
    assert cfg.filters == (Filter.CASE_FOLD, Filter.STRIP_LEADING_BLANKS, Filter.DICTIONARY_ORDER)
    assert cfg.strategy == SortStrategy.VERSION_ORDER
    assert cfg.stable and cfg.reverse and not cfg.unique
    assert cfg.parallel == 2
    assert output_path(raw) == "out.txt"
    assert output_path(raw, "other.txt") == "other.txt"


def test_cli_strategy_overrides_config():
    raw = {"sort": {"strategy": "general_numeric", "parallel": 3}}
    cfg = build_sort_config(raw, {"strategy": "human_numeric", "parallel": None})
    assert cfg.strategy == SortStrategy.NATURAL_ORDER
    assert cfg.parallel == 3


def test_invalid_config_is_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("sort:\n  strategy: random\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Config validation error"):
        load_config(str(path))


def test_empty_config_file_is_allowed(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == {}
    assert output_path({}) is None


def test_config_error_names_the_offending_key():
    from sortpar.utils import validate_config

    with pytest.raises(ValueError, match="at sort/parallel"):
        validate_config({"sort": {"parallel": 0}})
    with pytest.raises(ValueError, match="at <root>"):
        validate_config({"unexpected": 1})
    validate_config({"sort": {"filters": ["fold"], "strategy": "lexicographic"}})
