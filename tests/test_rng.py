import pytest

from bigblast.core.rng import RNG, ZERO_SEED_REPLACEMENT, splitmix32, xorshift32


def test_same_seed_same_sequence():
    a, b = RNG(42), RNG(42)
    assert [a.next_u32() for _ in range(50)] == [b.next_u32() for _ in range(50)]


def test_different_seeds_diverge():
    a, b = RNG(1), RNG(2)
    assert [a.next() for _ in range(10)] != [b.next() for _ in range(10)]


def test_xorshift32_reference_values():
    # x ^= x << 13; x ^= x >> 17; x ^= x << 5 starting from 1
    assert xorshift32(1) == 270369
    assert xorshift32(270369) == 67634689


def test_splitmix32_spreads_neighbouring_seeds():
    mixed = [splitmix32(s) for s in range(1, 11)]
    assert len(set(mixed)) == 10
    assert all(0 <= m <= 0xFFFFFFFF for m in mixed)
    # Small inputs no longer map to small states
    assert max(mixed) > 0x10000000


def test_small_seeds_do_not_start_near_zero():
    firsts = [RNG(s).next() for s in range(1, 11)]
    assert max(firsts) > 0.1
    picks = {RNG(s).pick_int(0, 2) for s in range(1, 31)}
    assert picks == {0, 1, 2}


def test_reseeding_replays():
    rng = RNG(1234)
    first = [rng.next_u32() for _ in range(5)]
    rng.seed = rng.seed
    assert [rng.next_u32() for _ in range(5)] == first


def test_next_in_unit_interval():
    rng = RNG(7)
    for _ in range(5000):
        value = rng.next()
        assert 0.0 <= value < 1.0


def test_pick_int_inclusive_bounds():
    rng = RNG(99)
    seen = {rng.pick_int(3, 6) for _ in range(2000)}
    assert seen == {3, 4, 5, 6}


def test_pick_int_single_value():
    rng = RNG(5)
    assert all(rng.pick_int(4, 4) == 4 for _ in range(20))


def test_pick_int_empty_range():
    with pytest.raises(ValueError):
        RNG(5).pick_int(3, 2)


def test_shuffle_is_in_place_permutation():
    rng = RNG(123)
    items = list(range(20))
    result = rng.shuffle(items)
    assert result is items
    assert sorted(items) == list(range(20))


def test_shuffle_reproducible():
    a = RNG(8).shuffle(list("abcdefgh"))
    b = RNG(8).shuffle(list("abcdefgh"))
    assert a == b


def test_zero_seed_still_advances():
    rng = RNG(0)
    assert rng.seed == 0
    values = [rng.next_u32() for _ in range(5)]
    assert all(values)
    assert len(set(values)) == 5


def test_zero_state_is_replaced(monkeypatch):
    monkeypatch.setattr("bigblast.core.rng.splitmix32", lambda x: 0)
    rng = RNG(5)
    assert rng.next_u32() == xorshift32(ZERO_SEED_REPLACEMENT)


def test_seed_masked_to_32_bits():
    assert RNG(2**32 + 5).seed == 5


def test_default_seed_from_clock(monkeypatch):
    monkeypatch.setattr("bigblast.core.rng.time.time", lambda: 1.5)
    assert RNG().seed == 1500
