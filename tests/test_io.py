import csv
import json

import pytest

from elasticbending.model.io import IOManager, output_to_dict
from elasticbending.solvers.solver import solve_elastica


def test_output_to_dict_single():
    out = solve_elastica(length=10.0, width=8.0, modulus=200.0, inertia=1e-8)
    data = output_to_dict(out)
    assert data["state"] == "done"
    assert data["length"] == 10.0
    assert data["widths"] == [8.0]
    assert data["forces"] == out.forces
    assert data["diagnostics"] == []
    assert len(data["branches"]) == 1
    assert len(data["branches"][0]["points"]) == 101


def test_output_to_dict_failed():
    out = solve_elastica(length=10.0)
    data = output_to_dict(out)
    assert data["state"] == "failed"
    assert data["branches"] == []
    assert data["length"] is None
    assert data["diagnostics"][0]["level"] == "error"


def test_save_json(tmp_path):
    out = solve_elastica(length=10.0, height=3.5)
    path = tmp_path / "result.json"
    IOManager.save_json(out, str(path))
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["height"] == 3.5
    assert len(data["widths"]) == 2
    assert data["m"] == pytest.approx(out.m_values)


def test_save_points_csv(tmp_path):
    out = solve_elastica(length=10.0, height=3.5)
    path = tmp_path / "points.csv"
    IOManager.save_points_csv(out, str(path))
    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["branch", "x", "y", "z"]
    assert len(rows) == 1 + sum(len(p) for p in out.points)
    assert {row[0] for row in rows[1:]} == {"0", "1"}
    first = [float(v) for v in rows[1][1:]]
    assert first == pytest.approx(out.points[0][0].tolist(), abs=1e-12)
