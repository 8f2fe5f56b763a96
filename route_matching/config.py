"""Matching options and how they are loaded.

The UI hands over slider values as a plain dict and the analysis tool can read a
JSON file. Both are merged field by field into `MatchingOptions`; anything not
given keeps its default.
"""

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from route_matching.calculation.distance_methods import DEFAULT_MAX_DISTANCE


@dataclass(frozen=True)
class MatchingOptions:
    # set distance at which the set similarity reaches 0
    max_distance: float = DEFAULT_MAX_DISTANCE
    # weight of the set similarity (MHD) in the final score
    mhd_weight: float = 0.6
    # weight of the top-to-bottom order similarity (DTW) in the final score
    order_weight: float = 0.4

    @property
    def weights(self) -> dict[str, float]:
        return {"mhd": self.mhd_weight, "order": self.order_weight}

    @classmethod
    def from_config(cls, config: Optional[dict[str, Any]] = None) -> "MatchingOptions":
        """merge a partial dict over the defaults. None values are ignored"""
        options = cls()
        if not config:
            return options

        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"Unknown matching option(s): {', '.join(sorted(unknown))}")

        updates = {key: float(value) for key, value in config.items() if value is not None}
        return replace(options, **updates)


def load_matching_options(path) -> MatchingOptions:
    """read MatchingOptions from a .json file"""
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise RuntimeError("matching options file must contain a JSON object")

    return MatchingOptions.from_config(data)
