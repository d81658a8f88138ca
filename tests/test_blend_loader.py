import json
from pathlib import Path

import pytest

from viscobat.blending import ConstraintKind, blend_from_dict, load_blend_from_json, solve_complex_blend
from viscobat.common.exceptions import MissingPropertyData

DATA = Path(__file__).resolve().parents[1] / "data" / "blends"


def test_load_blend_from_json(tmp_path):
    path = tmp_path / "blend.json"
    path.write_text(
        json.dumps(
            {
                "mixture": {"type": "setValue", "value": 50},
                "components": [
                    {"name": "heavy", "viscosity": 100},
                    {"name": "light", "viscosity": 10, "type": "range", "min": 0, "max": 80},
                ],
            }
        ),
        encoding="utf-8",
    )
    blend = load_blend_from_json(path)
    assert blend.correlation == "walther"
    assert blend.mixture.kind is ConstraintKind.SET_VALUE
    assert blend.components[1].constraint.max == 80.0
    assert blend.components[0].name == "heavy"

    result = solve_complex_blend(blend.components, blend.mixture, blend.correlation)
    assert abs(result.viscosity - 50.0) < 1e-6


def test_params_wrapper_and_defaults():
    blend = blend_from_dict({"params": {"components": [{"viscosity": 46}], "correlation": "refutas"}})
    assert blend.correlation == "refutas"
    assert blend.mixture.kind is ConstraintKind.FREE
    assert blend.components[0].name == "component_1"


def test_missing_fields_raise():
    with pytest.raises(MissingPropertyData):
        blend_from_dict({"components": []})
    with pytest.raises(MissingPropertyData):
        blend_from_dict({"components": [{"name": "no viscosity"}]})


def test_unknown_constraint_type():
    with pytest.raises(ValueError):
        blend_from_dict({"components": [{"viscosity": 46, "type": "between"}]})


@pytest.mark.parametrize("name", ["two_bases_target.json", "range_max_base.json", "cheapest_thin.json"])
def test_shipped_blend_definitions_solve(name):
    blend = load_blend_from_json(DATA / name)
    result = solve_complex_blend(blend.components, blend.mixture, blend.correlation)
    assert abs(sum(result.fractions.values()) - 100.0) <= 0.02
