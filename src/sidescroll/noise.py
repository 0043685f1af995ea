# src/sidescroll/noise.py
# Ken Perlin's improved noise over a permutation shuffled by JavaRandom,
# so a seed gives the same field everywhere the seed is shared.

import math
from typing import Tuple

from .rng import JavaRandom

OCTAVES = 8
BASE_STEP = 64.0
Z_SLICE = 128.0


def fade(t: float) -> float:
    # 6t^5 - 15t^4 + 10t^3
    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(t: float, a: float, b: float) -> float:
    return a + t * (b - a)


def grad(hash_: int, x: float, y: float, z: float) -> float:
    h = hash_ & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = z
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)


def shuffled_permutation(seed: int) -> Tuple[int, ...]:
    """Fisher-Yates over 0..255, duplicated to 512 entries."""
    rng = JavaRandom(seed)
    perm = list(range(256))
    for i in range(256):
        j = rng.next_int(256 - i) + i
        perm[i], perm[j] = perm[j], perm[i]
    return tuple(perm + perm)


class NoiseField:
    def __init__(self, seed: int = 0):
        self.p = shuffled_permutation(seed)

    def noise(self, x: float, y: float, z: float) -> float:
        p = self.p
        fx, fy, fz = math.floor(x), math.floor(y), math.floor(z)
        X, Y, Z = int(fx) & 255, int(fy) & 255, int(fz) & 255
        x -= fx
        y -= fy
        z -= fz
        u, v, w = fade(x), fade(y), fade(z)

        A = p[X] + Y
        AA = p[A] + Z
        AB = p[A + 1] + Z
        B = p[X + 1] + Y
        BA = p[B] + Z
        BB = p[B + 1] + Z

        return lerp(w,
                    lerp(v,
                         lerp(u, grad(p[AA], x, y, z),
                                 grad(p[BA], x - 1, y, z)),
                         lerp(u, grad(p[AB], x, y - 1, z),
                                 grad(p[BB], x - 1, y - 1, z))),
                    lerp(v,
                         lerp(u, grad(p[AA + 1], x, y, z - 1),
                                 grad(p[BA + 1], x - 1, y, z - 1)),
                         lerp(u, grad(p[AB + 1], x, y - 1, z - 1),
                                 grad(p[BB + 1], x - 1, y - 1, z - 1))))

    def perlin_noise(self, x: float, y: float) -> float:
        n = 0.0
        for i in range(OCTAVES):
            step = BASE_STEP / (1 << i)
            n += self.noise(x / step, y / step, Z_SLICE) / (1 << i)
        return n
