import numpy as np
from opensimplex import OpenSimplex
from typing import Optional, Sequence, TypeVar

T = TypeVar('T')

MAX_SEED = 999999


def get_random_seed() -> int:
    """Draw a fresh seed from OS entropy."""
    return int(np.random.default_rng().integers(0, MAX_SEED, endpoint=True))


class RandomSource:
    """Deterministic random source shared by every stage of a render."""

    def __init__(self, seed: Optional[int] = None):
        self.set_seed(get_random_seed() if seed is None else seed)

    def set_seed(self, seed: int) -> None:
        """Reset both the uniform generator and the noise field."""
        self.seed = int(seed)
        self._rng = np.random.default_rng(self.seed)
        self._simplex = OpenSimplex(seed=self.seed)

    def value(self) -> float:
        """Uniform real in [0, 1)."""
        return float(self._rng.random())

    def range(self, minimum: float, maximum: float) -> float:
        """Uniform real in [minimum, maximum)."""
        return float(self._rng.uniform(minimum, maximum))

    def range_int(self, minimum: int, maximum: int) -> int:
        """Uniform integer in [minimum, maximum], both ends included."""
        return int(self._rng.integers(minimum, maximum, endpoint=True))

    def pick(self, items: Sequence[T]) -> T:
        if len(items) == 0:
            raise ValueError("Cannot pick from an empty sequence")
        return items[int(self._rng.integers(0, len(items)))]

    def sign(self) -> int:
        return 1 if self._rng.random() > 0.5 else -1

    def noise2d(self, x: float, y: float, frequency: float = 1.0, amplitude: float = 1.0) -> float:
        """Coherent 2D noise in roughly [-amplitude, amplitude]."""
        return float(amplitude * self._simplex.noise2(x * frequency, y * frequency))

    def gaussian(self, mean: float = 0.0, standard_deviation: float = 1.0) -> float:
        return float(self._rng.normal(mean, standard_deviation))
