import json

from typer.testing import CliRunner

from floorgraph.cli import app
from floorgraph.core.model import Wall
from floorgraph.io.parser import load_plan, save_plan

runner = CliRunner()


def test_rooms_command(rectangle, tmp_path):
    path = tmp_path / "plan.json"
    save_plan(rectangle, str(path))

    result = runner.invoke(app, ["rooms", "--plan", str(path)])

    assert result.exit_code == 0
    assert "1 room(s)" in result.output


def test_rooms_command_point_outside(rectangle, tmp_path):
    path = tmp_path / "plan.json"
    save_plan(rectangle, str(path))

    result = runner.invoke(app, ["rooms", "--plan", str(path), "--at", "50,50"])

    assert result.exit_code == 1


def test_apply_command(rectangle, tmp_path):
    plan_path = tmp_path / "plan.json"
    op_path = tmp_path / "ops.json"
    out_path = tmp_path / "out.json"
    save_plan(rectangle, str(plan_path))
    op_path.write_text(json.dumps([{"op": "add_wall", "start": "a", "end": "c", "id": "diag"}]))

    result = runner.invoke(
        app, ["apply", "--plan", str(plan_path), "--op", str(op_path), "--out", str(out_path)]
    )

    assert result.exit_code == 0
    assert "diag" in load_plan(str(out_path)).walls


def test_validate_command(rectangle, tmp_path):
    good = tmp_path / "good.json"
    bad = tmp_path / "bad.json"
    save_plan(rectangle, str(good))
    save_plan(rectangle.replace(walls={**rectangle.walls, "dup": Wall("dup", "a", "b")}), str(bad))

    assert runner.invoke(app, ["validate", "--plan", str(good)]).exit_code == 0
    assert runner.invoke(app, ["validate", "--plan", str(bad)]).exit_code == 1


def test_missing_plan_file(tmp_path):
    result = runner.invoke(app, ["validate", "--plan", str(tmp_path / "nope.json")])
    assert result.exit_code == 1
