import pytest

from sidescroll.rng import JavaRandom, MASK48, MULTIPLIER, ADDEND, lcg_next, s32, s64, scramble


def draws(seed, n, bound):
    r = JavaRandom(seed)
    return [r.next_int(bound) for _ in range(n)]


def test_s32_wraps():
    assert s32(0x7FFFFFFF) == 2147483647
    assert s32(0x80000000) == -2147483648
    assert s32(0xFFFFFFFF) == -1
    assert s32(2147483647 + 1500000000) < 0
    assert s64(1 << 63) == -(1 << 63)


def test_scramble_masks_negative_seeds():
    assert scramble(-1) == (~MULTIPLIER) & MASK48
    assert 0 <= scramble(-(1 << 63)) <= MASK48


def test_golden_next_int():
    assert draws(42, 10, 100) == [30, 63, 48, 84, 70, 25, 5, 18, 19, 93]
    assert draws(42, 10, 10) == [0, 3, 8, 4, 0, 5, 5, 8, 9, 3]
    assert draws(0, 5, 100) == [60, 48, 29, 47, 15]
    assert draws(12345, 5, 35) == [26, 30, 11, 13, 30]
    assert draws(-1, 5, 7) == [3, 6, 4, 6, 6]


def test_golden_power_of_two_bound():
    assert draws(42, 8, 16) == [11, 0, 10, 0, 4, 15, 4, 11]


def test_golden_other_widths():
    r = JavaRandom(42)
    assert [r.next_int() for _ in range(3)] == [-1170105035, 234785527, -1360544799]
    assert JavaRandom(42).next_long() == -5025562857975149833
    assert JavaRandom(42).next_double() == 6553311036568663 / float(1 << 53)
    assert JavaRandom(42).next_float() == 12206493 / float(1 << 24)
    r = JavaRandom(42)
    assert [r.next_boolean() for _ in range(6)] == [True, False, True, False, False, True]


@pytest.mark.parametrize("seed", [0, 1, 42, 12345, -7, 2 ** 40, -(2 ** 63)])
def test_power_of_two_bound_takes_exactly_one_draw(seed):
    r = JavaRandom(seed)
    for _ in range(500):
        before = r.state
        v = r.next_int(16)
        assert 0 <= v < 16
        assert r.state == lcg_next(before)


def test_rejection_branch_redraws_on_wrapped_overflow():
    # Steer the stream so the next 31-bit draw is 0x7FFFFFFF; with this bound
    # bits - val + (bound - 1) wraps negative in 32 bits and must be rejected.
    bound = 1500000000
    target = 0x7FFFFFFF << 17
    inv = pow(MULTIPLIER, -1, 1 << 48)
    r = JavaRandom(0)
    r.state = ((target - ADDEND) * inv) & MASK48
    start = r.state

    v = r.next_int(bound)

    first = lcg_next(start)
    second = lcg_next(first)
    assert first >> 17 == 0x7FFFFFFF
    assert r.state == second
    assert v == (second >> 17) % bound


def test_non_positive_bound_returns_zero_without_drawing():
    r = JavaRandom(9)
    before = r.state
    assert r.next_int(0) == 0
    assert r.next_int(-3) == 0
    assert r.state == before


def test_gaussian_pair_is_cached():
    r = JavaRandom(42)
    g1 = r.next_gaussian()
    after_pair = r.state
    g2 = r.next_gaussian()
    assert r.state == after_pair
    assert g1 == pytest.approx(1.1419053154730547, rel=1e-12)
    assert g2 == pytest.approx(0.9194079489827879, rel=1e-12)
    # a fresh pair is drawn on the third call
    r.next_gaussian()
    assert r.state != after_pair


def test_set_seed_resets_stream_and_gaussian_cache():
    r = JavaRandom(42)
    r.next_gaussian()
    r.set_seed(42)
    assert r.next_gaussian() == JavaRandom(42).next_gaussian()
    r.set_seed(42)
    assert r.next_int(100) == 30
