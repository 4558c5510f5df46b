from __future__ import annotations

import math
from datetime import datetime, UTC
from pathlib import Path

from plan_visit.pipeline.plan_and_dispatch import PipelineResult


def _fmt_matrix(matrix) -> str:
    n = matrix.shape[0]
    header = "| from \\ to | " + " | ".join(str(j) for j in range(n)) + " |"
    lines = [header, "|---" * (n + 1) + "|"]
    for i in range(n):
        lines.append(f"| {i} | " + " | ".join(f"{matrix[i, j]:.1f}" for j in range(n)) + " |")
    return "\n".join(lines)


def _fmt_maneuvers(result: PipelineResult) -> str:
    lines = ["| Maneuver | Lat (deg) | Lon (deg) | Speed | Z |", "|---|---|---|---|---|"]
    for m in result.plan.maneuvers:
        g = m.data
        lines.append(
            f"| {m.maneuver_id} | {math.degrees(g.lat):.6f} | {math.degrees(g.lon):.6f} "
            f"| {g.speed} {g.speed_units.value} | {g.z} {g.z_units.value} |"
        )
    return "\n".join(lines)


def _now_iso() -> str:
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def write_plan_brief(result: PipelineResult, run_dir: Path | None = None) -> Path:
    run_dir = run_dir or Path("runs")
    run_dir.mkdir(parents=True, exist_ok=True)
    plan = result.plan
    brief_path = run_dir / f"brief_{plan.plan_id}_{result.request.request_id}.md"

    lines: list[str] = []
    lines.append(f"# Plan Brief: {plan.plan_id}")
    lines.append("")
    lines.append(f"**Request ID:** `{result.request.request_id}`  ")
    lines.append(f"**Generated:** {_now_iso()}")
    lines.append("")
    lines.append(f"_{plan.description}_")
    lines.append("")
    lines.append("## 1) Visiting order")
    order = " -> ".join(["0"] + [str(i) for i in result.tour.route] + ["0"])
    lines.append(f"- **Route:** {order}")
    lines.append(f"- **Tour length:** {result.tour.cost:.1f} m")
    lines.append("")
    lines.append("## 2) Range matrix (m, node 0 = vehicle)")
    lines.append(_fmt_matrix(result.matrix))
    lines.append("")
    lines.append("## 3) Maneuvers")
    lines.append(_fmt_maneuvers(result))
    lines.append("")
    lines.append(f"Start maneuver: `{plan.start_man_id}`, transitions: {len(plan.transitions)}")

    brief_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return brief_path
