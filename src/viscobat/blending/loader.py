import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from viscobat.common.exceptions import MissingPropertyData

from .constraints import BlendComponent, Constraint


@dataclass
class BlendDefinition:
    components: List[BlendComponent]
    mixture: Constraint
    correlation: str = "walther"


def blend_from_dict(data: Dict[str, Any]) -> BlendDefinition:
    # accepts both {"components": ..., "mixture": ...} and {"params": {...}}
    params = data.get("params", data)
    rows = params.get("components")
    if not rows:
        raise MissingPropertyData("Blend definition has no 'components' list")

    components = []
    for i, row in enumerate(rows):
        if row.get("viscosity") is None:
            raise MissingPropertyData(f"Component {i + 1} has no 'viscosity'")
        components.append(
            BlendComponent(
                viscosity=float(row["viscosity"]),
                constraint=Constraint.from_mapping(row),
                name=str(row.get("name", f"component_{i + 1}")),
            )
        )
    mixture = Constraint.from_mapping(params.get("mixture", {}))
    return BlendDefinition(components, mixture, str(params.get("correlation", "walther")))


def load_blend_from_json(json_path: Union[str, Path]) -> BlendDefinition:
    p = Path(json_path)
    data = json.loads(p.read_text(encoding="utf-8"))
    return blend_from_dict(data)
