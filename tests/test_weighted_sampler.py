from __future__ import annotations

import numpy as np
import pytest
from scipy import stats

from aliasdraw.sampling import (
    EmptyCollectionError,
    InvalidWeightError,
    WeightedItem,
    WeightedSampler,
    ZeroTotalWeightError,
)

from conftest import counts_of

WEIGHTS = [0.5, 10.0, 2.0, 0.1, 7.4, 3.0]
ALPHA = 1e-4


def _assert_fits(counts, weights):
    weights = np.asarray(weights, dtype=float)
    expected = weights / weights.sum() * counts.sum()
    _, p_value = stats.chisquare(counts, expected)
    assert p_value > ALPHA


def test_sample_one_converges_to_normalized_weights(make_sampler):
    sampler = make_sampler(WEIGHTS)
    draws = [sampler.sample_one() for _ in range(30000)]
    _assert_fits(counts_of(draws, len(WEIGHTS)), WEIGHTS)


def test_sample_many_converges_to_normalized_weights(make_sampler):
    sampler = make_sampler(WEIGHTS)
    draws = sampler.sample_many(100000)
    assert len(draws) == 100000
    _assert_fits(counts_of(draws, len(WEIGHTS)), WEIGHTS)


def test_uniform_weights_are_equally_likely(make_sampler):
    sampler = make_sampler([1, 1, 1, 1])
    _assert_fits(counts_of(sampler.sample_many(40000), 4), [1, 1, 1, 1])
    assert all(entry.threshold == 1.0 for entry in sampler.table)


def test_zero_weight_item_is_never_drawn(make_sampler):
    sampler = make_sampler([0, 5])
    assert all(item.value == 1 for item in sampler.sample_many(10000))
    assert all(sampler.sample_one().value == 1 for _ in range(1000))


def test_single_item_is_always_drawn(make_sampler):
    sampler = make_sampler([0.25])
    assert [item.value for item in sampler.sample_many(50)] == [0] * 50


def test_empty_collection_raises(make_sampler):
    sampler = make_sampler([])
    with pytest.raises(EmptyCollectionError):
        sampler.sample_one()


def test_negative_weight_raises_on_draw(make_sampler):
    sampler = make_sampler([-1, 2])
    with pytest.raises(InvalidWeightError):
        sampler.sample_one()


def test_zero_total_raises_on_draw(make_sampler):
    sampler = make_sampler([0, 0])
    with pytest.raises(ZeroTotalWeightError):
        sampler.sample_many(3)


def test_invalid_weights_are_only_detected_when_drawing(make_sampler):
    sampler = make_sampler([1.0])
    sampler.append(WeightedItem("bad", -3.0))
    with pytest.raises(InvalidWeightError):
        sampler.sample_one()
    assert sampler.table is None
    sampler.pop_back()
    assert sampler.sample_one().value == 0


def test_zero_count_still_builds_and_validates(make_sampler):
    sampler = make_sampler([1, 2])
    assert sampler.sample_many(0) == []
    assert sampler.is_built
    assert sampler.sample_many(0) == []
    assert sampler.sample_filtered(0, lambda item, collected: True) == []


def test_zero_count_on_empty_collection_raises_every_time(make_sampler):
    sampler = make_sampler([])
    for _ in range(2):
        with pytest.raises(EmptyCollectionError):
            sampler.sample_many(0)
        with pytest.raises(EmptyCollectionError):
            sampler.sample_filtered(0, lambda item, collected: True)


def test_negative_count_rejected(make_sampler):
    sampler = make_sampler([1])
    with pytest.raises(ValueError):
        sampler.sample_many(-1)
    with pytest.raises(ValueError):
        sampler.sample_filtered(-1, lambda item, collected: True)


def test_table_is_reused_between_draws(make_sampler):
    sampler = make_sampler([1, 2, 3])
    sampler.sample_one()
    table = sampler.table
    sampler.sample_many(10)
    assert sampler.table is table


def test_draw_after_mutation_sees_new_item(make_sampler):
    sampler = make_sampler([1.0])
    assert sampler.sample_one().value == 0
    assert sampler.is_built
    sampler.append(WeightedItem("new", 1e12))
    assert not sampler.is_built
    assert sampler.sample_one().value == "new"
    assert len(sampler.table) == 2


@pytest.mark.parametrize(
    "mutate",
    [
        lambda s: s.append(WeightedItem("x", 1.0)),
        lambda s: s.extend([WeightedItem("x", 1.0)]),
        lambda s: s.insert(1, WeightedItem("x", 1.0)),
        lambda s: s.push_front(WeightedItem("x", 1.0)),
        lambda s: s.remove_at(1),
        lambda s: s.remove_range(0, 2),
        lambda s: s.pop_back(),
        lambda s: s.pop_front(),
        lambda s: s.reverse(),
        lambda s: s.clear(),
    ],
)
def test_every_mutation_invalidates_the_table(make_sampler, mutate):
    sampler = make_sampler([1, 2, 3])
    sampler.build_table()
    mutate(sampler)
    assert sampler.table is None


def test_read_only_access_keeps_the_table(make_sampler):
    sampler = make_sampler([1, 2, 3])
    sampler.build_table()
    assert len(sampler) == 3
    assert sampler[1].value == 1
    assert [item.value for item in sampler] == [0, 1, 2]
    assert sampler.weights == [1.0, 2.0, 3.0]
    sampler.items.append(WeightedItem("ignored", 1.0))
    assert sampler.is_built
    assert len(sampler) == 3


def test_positional_mutators():
    sampler = WeightedSampler([WeightedItem("b", 1), WeightedItem("c", 1)])
    sampler.push_front(WeightedItem("a", 1))
    sampler.append(WeightedItem("d", 1))
    assert [item.value for item in sampler] == ["a", "b", "c", "d"]
    assert sampler.pop_front().value == "a"
    assert sampler.pop_back().value == "d"
    removed = sampler.remove_range(0, 5)
    assert [item.value for item in removed] == ["b", "c"]
    assert len(sampler) == 0
    with pytest.raises(IndexError):
        sampler.pop_back()
    with pytest.raises(IndexError):
        sampler.pop_front()
    with pytest.raises(ValueError):
        sampler.remove_range(0, -1)


def test_remove_range_with_negative_start_counts_from_the_end():
    sampler = WeightedSampler([WeightedItem(v, 1) for v in "abc"])
    removed = sampler.remove_range(-1, 2)
    assert [item.value for item in removed] == ["c"]
    assert [item.value for item in sampler] == ["a", "b"]
    removed = sampler.remove_range(-5, 1)
    assert [item.value for item in removed] == ["a"]
    assert [item.value for item in sampler] == ["b"]


def test_custom_weight_accessor(rng):
    sampler = WeightedSampler([("rare", 0.0), ("common", 1.0)], weight=lambda t: t[1], rng=rng)
    assert {name for name, _ in sampler.sample_many(500)} == {"common"}


def test_seeded_samplers_are_reproducible():
    items = [WeightedItem(i, w) for i, w in enumerate(WEIGHTS)]
    a = WeightedSampler(items, rng=42)
    b = WeightedSampler(items, rng=42)
    assert a.sample_many(100) == b.sample_many(100)


def test_clone_reuses_the_built_table(make_sampler):
    sampler = make_sampler([1, 2, 3])
    sampler.build_table()
    clone = sampler.clone()
    assert clone.table is sampler.table
    assert clone.items == sampler.items


def test_clone_of_unbuilt_sampler_is_unbuilt(make_sampler):
    clone = make_sampler([1, 2]).clone()
    assert not clone.is_built


def test_clone_is_independent(make_sampler):
    original = make_sampler([1, 1])
    original.build_table()
    clone = original.clone()

    clone.append(WeightedItem("heavy", 1e12))
    assert original.is_built
    assert all(item.value in (0, 1) for item in original.sample_many(2000))
    assert clone.sample_one().value == "heavy"

    original.clear()
    assert len(clone) == 3
    assert clone.sample_one().value == "heavy"


def test_filtered_with_accept_all_matches_sample_many(make_sampler):
    sampler = make_sampler(WEIGHTS)
    draws = sampler.sample_filtered(100000, lambda item, collected: True)
    assert len(draws) == 100000
    filtered_counts = counts_of(draws, len(WEIGHTS))
    many_counts = counts_of(sampler.sample_many(100000), len(WEIGHTS))
    _assert_fits(filtered_counts, WEIGHTS)
    _, p_value, _, _ = stats.chi2_contingency(np.vstack([filtered_counts, many_counts]))
    assert p_value > ALPHA


def test_filtered_without_duplicates(make_sampler):
    sampler = make_sampler([1, 1, 1, 1, 1])
    for _ in range(50):
        picked = sampler.sample_filtered(5, lambda item, collected: item not in collected)
        assert sorted(item.value for item in picked) == [0, 1, 2, 3, 4]


def test_filtered_result_is_short_when_nothing_is_eligible(make_sampler):
    sampler = make_sampler([1, 1, 1, 1, 1])
    picked = sampler.sample_filtered(8, lambda item, collected: item not in collected)
    assert len(picked) == 5
    assert len(set(picked)) == 5


def test_filtered_falls_back_to_first_eligible_alias(make_sampler):
    sampler = make_sampler([1, 1])
    picked = sampler.sample_filtered(200, lambda item, collected: item.value != 0)
    assert [item.value for item in picked] == [1] * 200


def test_filtered_passes_collected_items_to_predicate(make_sampler):
    sampler = make_sampler([1, 2, 3])
    seen_lengths = []

    def predicate(item, collected):
        seen_lengths.append(len(collected))
        return True

    sampler.sample_filtered(4, predicate)
    assert seen_lengths == [0, 1, 2, 3]


def test_filtered_rejecting_everything_returns_empty(make_sampler):
    sampler = make_sampler([1, 2, 3])
    assert sampler.sample_filtered(10, lambda item, collected: False) == []


def test_filtered_fallback_scans_in_index_order(make_sampler):
    sampler = make_sampler([1, 1, 1])
    rejected_draws = 0
    for _ in range(200):
        offered = []

        def predicate(item, collected):
            offered.append(item.value)
            return item.value != 2 and item not in collected

        picked = [item.value for item in sampler.sample_filtered(1, predicate)]
        if offered[0] == 2:
            rejected_draws += 1
            assert offered == [2, 0]
            assert picked == [0]
        else:
            assert picked == offered[:1]
    assert rejected_draws > 0


def test_filtered_without_duplicates_never_returns_a_rejected_item(make_sampler):
    sampler = make_sampler([1, 1, 1])
    for _ in range(50):
        picked = sampler.sample_filtered(
            3, lambda item, collected: item.value != 2 and item not in collected
        )
        assert sorted(item.value for item in picked) == [0, 1]


def test_non_numeric_weight_raises_on_draw(rng):
    sampler = WeightedSampler([("a", 1.0), ("b", None)], weight=lambda t: t[1], rng=rng)
    with pytest.raises(InvalidWeightError) as excinfo:
        sampler.sample_one()
    assert excinfo.value.index == 1
    assert sampler.table is None


def test_huge_weights_are_drawn_evenly(make_sampler):
    sampler = make_sampler([1e308, 1e308])
    _assert_fits(counts_of(sampler.sample_many(20000), 2), [1, 1])
