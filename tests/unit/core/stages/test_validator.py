from __future__ import annotations

"""
Unit tests for the Configuration Validator.

Verifies:
1. Type coercion (String to Bool/Int).
2. Default value injection.
3. Strict mode validation.
"""

import pytest

from reviewtree.core.pipeline.stages.validator import validate_config


def test_validate_none_returns_defaults() -> None:
    """Passing None should return the full default configuration."""
    cfg, warnings = validate_config(None)

    assert isinstance(cfg, dict)
    assert cfg["duplicate_policy"] == "accumulate"
    assert cfg["print_tree"] is True
    assert cfg["source_timeout"] == 30

    assert len(warnings) > 0


def test_validate_empty_dict_returns_defaults(default_config) -> None:
    """Passing an empty dict should merge with defaults."""
    cfg, warnings = validate_config({})

    assert cfg == default_config
    assert warnings == []


def test_validate_converts_strings_to_bools() -> None:
    raw = {"print_tree": "no", "expand_all": "yes"}
    cfg, warnings = validate_config(raw, strict=False)

    assert cfg["print_tree"] is False
    assert cfg["expand_all"] is True
    assert len(warnings) == 2


def test_validate_converts_numeric_strings_to_timeout() -> None:
    cfg, warnings = validate_config({"source_timeout": " 45 "})
    assert cfg["source_timeout"] == 45
    assert warnings


@pytest.mark.parametrize("bad", [0, -3, "soon", True, 1.5])
def test_validate_rejects_bad_timeout_with_fallback(bad) -> None:
    cfg, warnings = validate_config({"source_timeout": bad})
    assert cfg["source_timeout"] == 30
    assert any("source_timeout" in w for w in warnings)


def test_validate_normalizes_duplicate_policy() -> None:
    cfg, _ = validate_config({"duplicate_policy": " LAST_WINS "})
    assert cfg["duplicate_policy"] == "last_wins"


def test_validate_unknown_policy_falls_back() -> None:
    cfg, warnings = validate_config({"duplicate_policy": "merge"})
    assert cfg["duplicate_policy"] == "accumulate"
    assert warnings


def test_validate_strips_strings_and_rejects_non_strings() -> None:
    cfg, warnings = validate_config({"input_path": "  batch.json  ", "export_path": 42})
    assert cfg["input_path"] == "batch.json"
    assert cfg["export_path"] == ""
    assert any("export_path" in w for w in warnings)


def test_validate_ignores_unknown_keys() -> None:
    cfg, warnings = validate_config({"theme": "dark"})
    assert "theme" not in cfg
    assert any("theme" in w for w in warnings)


def test_strict_mode_raises_on_invalid_type() -> None:
    with pytest.raises(TypeError):
        validate_config({"print_tree": "maybe"}, strict=True)


def test_strict_mode_raises_on_unknown_key() -> None:
    with pytest.raises(ValueError):
        validate_config({"theme": "dark"}, strict=True)


def test_strict_mode_raises_on_non_dict() -> None:
    with pytest.raises(TypeError):
        validate_config([], strict=True)
