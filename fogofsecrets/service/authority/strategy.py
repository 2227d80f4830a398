"""
Zone assignment strategies

The deployed contract draws from on-chain entropy; locally the draw is a
pluggable strategy so tests can pin the outcome.
"""
import random
from typing import Dict, Optional, Tuple

from fogofsecrets.model import MapBounds, normalize_address


class AssignmentStrategy:
    """assign_zone(address) -> (is_encrypted, cell index)"""

    def __init__(self, bounds: MapBounds, seed: Optional[int] = None):
        self.bounds = bounds
        self.rng = random.Random(seed)

    def encrypted_probability(self) -> float:
        raise NotImplementedError

    def assign_zone(self, address: str) -> Tuple[bool, int]:
        bounds = self.bounds
        has_encrypted = bounds.encrypted_cells > 0
        has_public = bounds.total_cells > bounds.encrypted_cells
        if not has_encrypted and not has_public:
            raise ValueError("map has no cells to assign")

        if has_encrypted and has_public:
            is_encrypted = self.rng.random() < self.encrypted_probability()
        else:
            is_encrypted = has_encrypted

        if is_encrypted:
            return True, self.rng.randint(1, bounds.encrypted_cells)
        return False, self.rng.randint(bounds.encrypted_cells + 1, bounds.total_cells)


class WeightedZoneStrategy(AssignmentStrategy):
    """Encrypted zone drawn with probability encrypted_cells / total_cells"""

    def encrypted_probability(self) -> float:
        return self.bounds.encrypted_cells / self.bounds.total_cells


class UniformZoneStrategy(AssignmentStrategy):
    """Both zones equally likely regardless of their size"""

    def encrypted_probability(self) -> float:
        return 0.5


class ScriptedStrategy(AssignmentStrategy):
    """Deterministic outcomes per address, for tests and demos"""

    def __init__(self, bounds: MapBounds, outcomes: Dict[str, Tuple[bool, int]]):
        super().__init__(bounds)
        self.outcomes = {normalize_address(a): o for a, o in outcomes.items()}

    def assign_zone(self, address: str) -> Tuple[bool, int]:
        is_encrypted, index = self.outcomes[normalize_address(address)]
        in_zone = self.bounds.in_encrypted_zone(index) if is_encrypted else self.bounds.in_public_zone(index)
        if not in_zone:
            raise ValueError(f"scripted cell {index} is outside the {'encrypted' if is_encrypted else 'public'} zone")
        return is_encrypted, index


STRATEGIES = {
    "weighted": WeightedZoneStrategy,
    "uniform": UniformZoneStrategy,
}


def create_strategy(name: str, bounds: MapBounds, seed: Optional[int] = None) -> AssignmentStrategy:
    try:
        return STRATEGIES[name](bounds, seed)
    except KeyError:
        raise ValueError(f"unknown zone strategy: {name}") from None
