import json

import pytest

from floorgraph import config
from floorgraph.core.model import Door, Window
from floorgraph.io.parser import load_plan, plan_from_dict, plan_to_dict, save_plan


def test_save_and_load(rectangle, tmp_path):
    plan = rectangle.replace(
        doors={"d1": Door("d1", "w1", 0.5, type="double", width=6.0, orientation=2)},
        windows={"v1": Window("v1", "w2", 0.4, sill_height=2.5)},
    )
    path = tmp_path / "nested" / "plan.json"

    save_plan(plan, str(path))

    assert load_plan(str(path)) == plan


def test_snapshot_uses_camel_case(rectangle):
    data = plan_to_dict(rectangle.replace(windows={"v1": Window("v1", "w1", 0.5)}))

    assert set(data) == {"corners", "walls", "doors", "windows"}
    assert data["walls"][0]["startCornerId"] == "a"
    assert data["walls"][0]["wallType"] == "solid"
    assert data["windows"][0]["wallId"] == "w1"
    assert "sillHeight" in data["windows"][0]
    assert "rooms" not in data


def test_defaults_and_id_keyed_objects():
    plan = plan_from_dict(
        {
            "corners": {"a": {"x": 0, "y": 0}, "b": {"x": 3, "y": 4}},
            "walls": [{"id": "w1", "startCornerId": "a", "endCornerId": "b", "extra": True}],
            "doors": [{"id": "d1", "wallId": "w1", "position": 0.5, "type": "double"}],
        }
    )

    assert plan.corners["b"].y == 4.0
    assert plan.walls["w1"].thickness == config.WALL_THICKNESS
    assert plan.doors["d1"].width == config.DOOR_WIDTH_DOUBLE
    assert plan.windows == {}
    assert plan.wall_length("w1") == pytest.approx(5.0)


def test_missing_field_raises():
    with pytest.raises(ValueError, match="Invalid wall data"):
        plan_from_dict({"walls": [{"id": "w1", "startCornerId": "a"}]})

    with pytest.raises(ValueError, match="must be a list or an object"):
        plan_from_dict({"corners": "abc"})


def test_load_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_plan(str(tmp_path / "missing.json"))

    path = tmp_path / "list.json"
    path.write_text(json.dumps([1, 2, 3]))
    with pytest.raises(ValueError, match="JSON object"):
        load_plan(str(path))
