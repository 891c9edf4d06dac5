# lemin/params.py
from dataclasses import dataclass, fields, asdict
import json


@dataclass
class Params:
    # composite path score
    w_length: float = 0.4
    w_independence: float = 0.3
    w_connectivity: float = 0.2
    w_position: float = 0.1
    connectivity_scale: float = 20.0

    # selection: per-pair overlap budget is (len_a + len_b) // overlap_divisor
    overlap_divisor: int = 8

    # distributor
    interference: float = 0.8
    backlog: float = 0.5
    delay_factor: float = 1.5
    eff_length_weight: float = 0.6
    eff_degree_weight: float = 0.4
    degree_saturation: float = 4.0

    # simulator priority
    departed_bonus: float = 0.5
    ready_bonus: float = 0.3

    def to_dict(self):
        return asdict(self)


def load_params(path: str) -> Params:
    """Params from a JSON object; missing keys keep their defaults."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    known = {f.name for f in fields(Params)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"{path}: unknown params {unknown}")
    return Params(**data)
