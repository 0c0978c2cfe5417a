"""Noise height map using OpenSimplex."""

from opensimplex import OpenSimplex

from city_layout.seeds import derive_seed


class NoiseHeightMap:
    """Integer terrain heights from layered simplex noise.

    Heights are ``base_height + amplitude * fbm(x, z)`` rounded to the grid,
    so with the defaults roughly half the world lies at or below a sea level
    of ``base_height``. The same seed string always gives the same terrain.
    """

    def __init__(
        self,
        seed: str,
        base_height: int = 32,
        amplitude: float = 24.0,
        scale: float = 0.01,
        octaves: int = 4,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
    ) -> None:
        if octaves <= 0:
            raise ValueError(f"octaves must be positive, got {octaves}")
        self.seed = seed
        self.base_height = base_height
        self.amplitude = amplitude
        self.scale = scale
        self.octaves = octaves
        self.persistence = persistence
        self.lacunarity = lacunarity
        self._simplex = OpenSimplex(seed=derive_seed(seed, "heightmap"))
        # Octave weights and frequencies do not depend on the cell
        self._layers = [
            (persistence**i, scale * lacunarity**i) for i in range(octaves)
        ]
        self._norm = sum(weight for weight, _ in self._layers)

    def fbm(self, x: float, z: float) -> float:
        """Fractal noise at (x, z), normalized to roughly [-1, 1]."""
        total = sum(
            weight * self._simplex.noise2(x * freq, z * freq)
            for weight, freq in self._layers
        )
        return total / self._norm

    def __call__(self, x: int, z: int) -> int:
        return self.base_height + round(self.amplitude * self.fbm(x, z))

    def __repr__(self) -> str:
        return f"NoiseHeightMap(seed={self.seed!r}, base_height={self.base_height})"
