import json
from pathlib import Path

from plan_visit.models import plan_control_json_schema

out = Path("schemas/plan_control.schema.json")
out.parent.mkdir(parents=True, exist_ok=True)
out.write_text(json.dumps(plan_control_json_schema(), indent=2))
print(f"Wrote {out}")
