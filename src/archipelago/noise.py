"""Seeded randomness and gradient noise for world generation.

Provides a Mulberry32 random stream, a permutation-table gradient noise,
fBm (fractal Brownian motion) and ridged multifractal variants. Everything
here is a pure function of the seed, so a world can be rebuilt bit for bit.
"""

import math

DEFAULT_SEED = 12345

_UINT32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply, keeping the low 32 bits."""
    return (a * b) & _UINT32


def hash_string(text: str) -> int:
    """Hash a string seed to a non-negative integer.

    Uses the classic ``hash * 31 + code_unit`` string hash over UTF-16 code
    units, wrapped to signed 32 bits, then takes the absolute value.
    """
    value = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        value = (value * 31 + code_unit) & _UINT32
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value)


def canonicalize_seed(seed: int | float | str | None) -> int:
    """Convert a user supplied seed to an unsigned 32-bit integer.

    Strings are hashed. Numbers are truncated and wrapped to 32 bits.
    Zero, NaN, infinities, booleans and None fall back to DEFAULT_SEED.
    """
    if isinstance(seed, str):
        return hash_string(seed) & _UINT32
    if seed is None or isinstance(seed, bool):
        return DEFAULT_SEED
    if isinstance(seed, float) and not math.isfinite(seed):
        return DEFAULT_SEED
    if not seed:
        return DEFAULT_SEED
    return int(seed) & _UINT32


class Mulberry32:
    """Mulberry32 pseudo-random stream producing floats in [0, 1)."""

    def __init__(self, seed: int):
        self._state = seed & _UINT32

    def __call__(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & _UINT32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t = ((t + _imul(t ^ (t >> 7), t | 61)) & _UINT32) ^ t
        return (t ^ (t >> 14)) / 4294967296


def _fade(t: float) -> float:
    # 6t^5 - 15t^4 + 10t^3
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def _grad(hash_value: int, x: float, y: float) -> float:
    h = hash_value & 7
    u = x if h < 4 else y
    v = y if h < 4 else x
    return (-u if h & 1 else u) + (-2.0 * v if h & 2 else 2.0 * v)


class NoiseEngine:
    """Owns one seeded random stream and the matching permutation table.

    The stream is consumed in a fixed order by island placement, so every
    caller sharing an engine must draw in the same sequence to reproduce a
    world. Noise sampling reads only the permutation table and never
    advances the stream.
    """

    def __init__(self, seed: int | float | str | None = DEFAULT_SEED):
        self.seed = canonicalize_seed(seed)
        self._rng = Mulberry32(self.seed)
        self.perm = self._build_permutation()

    def _build_permutation(self) -> list[int]:
        """Fisher-Yates shuffle of 0..255, doubled to avoid index wrapping."""
        p = list(range(256))
        for i in range(255, 0, -1):
            j = math.floor(self._rng() * (i + 1))
            p[i], p[j] = p[j], p[i]
        return p + p

    def reset(self) -> None:
        """Restart the stream at the current seed and rebuild the table."""
        self._rng = Mulberry32(self.seed)
        self.perm = self._build_permutation()

    def reseed(self, seed: int | float | str | None) -> None:
        """Switch to a new seed and reset."""
        self.seed = canonicalize_seed(seed)
        self.reset()

    def random(self) -> float:
        """Next draw from the stream, in [0, 1)."""
        return self._rng()

    def random_range(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        return low + self._rng() * (high - low)

    def random_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both ends inclusive."""
        return math.floor(self.random_range(low, high + 1))

    def noise_2d(self, x: float, y: float) -> float:
        """Gradient noise at (x, y).

        Returns 0 at integer lattice points; the magnitude stays below 3.
        """
        fx = math.floor(x)
        fy = math.floor(y)
        xi = fx & 255
        yi = fy & 255
        xf = x - fx
        yf = y - fy
        u = _fade(xf)
        v = _fade(yf)

        perm = self.perm
        a = perm[xi] + yi
        b = perm[xi + 1] + yi

        return _lerp(
            _lerp(_grad(perm[a], xf, yf), _grad(perm[b], xf - 1, yf), u),
            _lerp(_grad(perm[a + 1], xf, yf - 1), _grad(perm[b + 1], xf - 1, yf - 1), u),
            v,
        )

    def fbm(
        self,
        x: float,
        y: float,
        octaves: int = 6,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
    ) -> float:
        """Fractal Brownian motion built from noise_2d.

        Sums octaves at increasing frequency and decreasing amplitude, then
        divides by the total amplitude so the range does not grow with the
        octave count.

        Args:
            x: Sample x coordinate.
            y: Sample y coordinate.
            octaves: Number of noise layers to sum.
            lacunarity: Frequency multiplier between octaves.
            persistence: Amplitude multiplier between octaves.

        Returns:
            Normalized noise value.
        """
        value = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0

        for _ in range(octaves):
            value += self.noise_2d(x * frequency, y * frequency) * amplitude
            max_value += amplitude
            amplitude *= persistence
            frequency *= lacunarity

        return value / max_value

    def ridged_noise(
        self,
        x: float,
        y: float,
        octaves: int = 6,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
    ) -> float:
        """Ridged multifractal noise.

        Each octave is folded with ``1 - |n|`` and squared, then weighted by
        the previous octave's signal so ridges sharpen where earlier octaves
        were already high.

        Args:
            x: Sample x coordinate.
            y: Sample y coordinate.
            octaves: Number of noise layers.
            lacunarity: Frequency multiplier between octaves.
            persistence: Amplitude multiplier between octaves.

        Returns:
            Non-negative, amplitude-normalized noise value.
        """
        value = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0
        weight = 1.0

        for _ in range(octaves):
            signal = self.noise_2d(x * frequency, y * frequency)
            signal = 1.0 - abs(signal)
            signal *= signal
            signal *= weight
            weight = min(1.0, max(0.0, signal * 2))
            value += signal * amplitude
            max_value += amplitude
            amplitude *= persistence
            frequency *= lacunarity

        return value / max_value
