import json
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).parents[1]


def test_cli_plans_example(tmp_path):
    env = os.environ.copy()
    env.pop("PLANVISIT_POINTS", None)
    res = subprocess.run(
        [sys.executable, str(ROOT / "scripts" / "run_visit.py"),
         "--config", str(ROOT / "examples" / "missions" / "harbour_visit.json"),
         "--lat", "41.1852", "--lon", "-8.7068", "--out", str(tmp_path), "--seed", "4"],
        env=env, capture_output=True, text=True, check=False,
    )
    assert res.returncode == 0, res.stderr
    summary = json.loads(res.stdout.splitlines()[0])
    assert sorted(summary["route"]) == [1, 2, 3, 4]
    assert (tmp_path / "dispatch.ndjson").exists()
    assert Path(summary["brief"]).exists()


def test_cli_rejects_odd_points(tmp_path):
    env = os.environ.copy()
    env["PLANVISIT_POINTS"] = "41.0,-8.0,42.0"
    res = subprocess.run(
        [sys.executable, str(ROOT / "scripts" / "run_visit.py"), "--lat", "0", "--lon", "0", "--out", str(tmp_path)],
        env=env, capture_output=True, text=True, check=False,
    )
    assert res.returncode == 2
    assert "Odd number of points" in res.stderr


def test_export_schema_writes_plan_control_schema(tmp_path):
    res = subprocess.run(
        [sys.executable, str(ROOT / "scripts" / "export_schema.py")],
        cwd=tmp_path, capture_output=True, text=True, check=False,
    )
    assert res.returncode == 0, res.stderr
    schema = json.loads((tmp_path / "schemas" / "plan_control.schema.json").read_text())
    assert schema["title"] == "PlanControl"
    assert "MissionPlan" in schema["$defs"]
