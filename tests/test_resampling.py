"""Tests for resampling strategies and ResampledPredictor."""

import numpy as np
import pytest

from rocresample.exceptions import EmptyDomainError, ResampleIndexError
from rocresample.predictor import Predictor, PredictorLike
from rocresample.resampling import (
    ResampledPredictor,
    ResampleStrategy,
    draw_indices,
    get_resampled_vector,
    non_stratified_indices,
    resample,
    resolve_strategy,
    stratified_indices,
)


def _predictor(m: int = 30, n: int = 20, seed: int = 0) -> Predictor:
    rng = np.random.default_rng(seed)
    return Predictor(rng.standard_normal(m), rng.standard_normal(n) + 2.0)


# ------------------------------------------------------------------ #
# Index generation
# ------------------------------------------------------------------ #


class TestDrawIndices:
    """Tests for the uniform with-replacement draw."""

    def test_shape_and_domain(self):
        rng = np.random.default_rng(0)
        idx = draw_indices(7, 500, rng)
        assert idx.shape == (500,)
        assert idx.dtype == np.intp
        assert idx.min() >= 0
        assert idx.max() < 7

    def test_covers_domain(self):
        idx = draw_indices(5, 1000, np.random.default_rng(1))
        assert set(idx.tolist()) == {0, 1, 2, 3, 4}

    def test_two_dimensional(self):
        idx = draw_indices(4, (3, 6), np.random.default_rng(2))
        assert idx.shape == (3, 6)

    def test_zero_draws_from_empty_domain(self):
        idx = draw_indices(0, 0, np.random.default_rng(0))
        assert idx.shape == (0,)
        assert idx.dtype == np.intp

    def test_draws_from_empty_domain_raise(self):
        with pytest.raises(EmptyDomainError, match="empty case group"):
            draw_indices(0, 3, np.random.default_rng(0), group="case group")

    def test_empty_domain_error_is_value_error(self):
        with pytest.raises(ValueError):
            draw_indices(0, 1, np.random.default_rng(0))


class TestStratifiedIndices:
    """Tests for within-group index generation."""

    def test_lengths_and_domains(self):
        controls_idx, cases_idx = stratified_indices(13, 4, np.random.default_rng(0))
        assert controls_idx.shape == (13,)
        assert cases_idx.shape == (4,)
        assert controls_idx.min() >= 0 and controls_idx.max() < 13
        assert cases_idx.min() >= 0 and cases_idx.max() < 4

    def test_reproducible(self):
        a = stratified_indices(10, 8, np.random.default_rng(99))
        b = stratified_indices(10, 8, np.random.default_rng(99))
        np.testing.assert_array_equal(a[0], b[0])
        np.testing.assert_array_equal(a[1], b[1])

    def test_batched_shapes(self):
        controls_idx, cases_idx = stratified_indices(
            6, 3, np.random.default_rng(0), n_boot=11
        )
        assert controls_idx.shape == (11, 6)
        assert cases_idx.shape == (11, 3)

    def test_empty_group(self):
        controls_idx, cases_idx = stratified_indices(5, 0, np.random.default_rng(0))
        assert controls_idx.shape == (5,)
        assert cases_idx.shape == (0,)


class TestNonStratifiedIndices:
    """Tests for pooled index generation and the slot partition."""

    def test_lengths(self):
        controls_idx, cases_idx = non_stratified_indices(9, 6, np.random.default_rng(0))
        assert controls_idx.shape == (9,)
        assert cases_idx.shape == (6,)

    def test_pooled_domains(self):
        m, n = 9, 6
        controls_idx, cases_idx = non_stratified_indices(m, n, np.random.default_rng(0))
        assert controls_idx.min() >= 0 and controls_idx.max() < m + n
        assert cases_idx.min() >= -m and cases_idx.max() < n

    def test_first_draws_fill_control_slots(self):
        m, n = 9, 6
        seed = 123
        pooled = np.random.default_rng(seed).integers(0, m + n, size=m + n)
        controls_idx, cases_idx = non_stratified_indices(m, n, np.random.default_rng(seed))
        np.testing.assert_array_equal(controls_idx, pooled[:m])
        np.testing.assert_array_equal(cases_idx, pooled[m:] - m)

    def test_draws_cross_groups(self):
        m, n = 50, 50
        controls_idx, cases_idx = non_stratified_indices(m, n, np.random.default_rng(4))
        # With 100 pooled draws both kinds of cross-group fill are
        # overwhelmingly likely.
        assert np.any(controls_idx >= m)
        assert np.any(cases_idx < 0)

    def test_empty_cases(self):
        controls_idx, cases_idx = non_stratified_indices(4, 0, np.random.default_rng(0))
        assert controls_idx.shape == (4,)
        assert cases_idx.shape == (0,)


class TestResolveStrategy:
    """Tests for strategy selection."""

    def test_by_value(self):
        assert resolve_strategy("stratified") is ResampleStrategy.STRATIFIED
        assert resolve_strategy("non_stratified") is ResampleStrategy.NON_STRATIFIED

    def test_by_member(self):
        assert resolve_strategy(ResampleStrategy.STRATIFIED) is ResampleStrategy.STRATIFIED

    def test_rejects_unknown(self):
        with pytest.raises(ValueError, match="Invalid strategy"):
            resolve_strategy("balanced")


def test_get_resampled_vector():
    values = np.array([10.0, 20.0, 30.0])
    np.testing.assert_array_equal(
        get_resampled_vector(values, np.array([2, 2, 0])), [30.0, 30.0, 10.0]
    )


# ------------------------------------------------------------------ #
# ResampledPredictor
# ------------------------------------------------------------------ #


class TestDirectConstruction:
    """Tests for ResampledPredictor built from explicit indices."""

    def setup_method(self):
        self.source = Predictor([3.0, 1.0, 2.0], [5.0, 4.0])

    def test_indexed_access(self):
        rp = ResampledPredictor(self.source, [2, 2, 0], [1, 1])
        assert [rp[i] for i in range(5)] == [2.0, 2.0, 3.0, 4.0, 4.0]

    def test_materialised_groups(self):
        rp = ResampledPredictor(self.source, [1, 0, 1], [0, 1])
        np.testing.assert_array_equal(rp.controls, [1.0, 3.0, 1.0])
        np.testing.assert_array_equal(rp.cases, [5.0, 4.0])

    def test_sizes_match_source(self):
        rp = ResampledPredictor(self.source, [0, 0, 0], [0, 0])
        assert rp.n_controls == 3
        assert rp.n_cases == 2
        assert rp.n_total == 5

    def test_satisfies_protocol(self):
        rp = ResampledPredictor(self.source, [0, 1, 2], [0, 1])
        assert isinstance(rp, PredictorLike)
        assert rp.source is self.source
        assert rp.strategy is None

    def test_identity_indices_reproduce_source(self):
        rp = ResampledPredictor(self.source, [0, 1, 2], [0, 1])
        np.testing.assert_array_equal(rp.values, self.source.values)
        np.testing.assert_array_equal(rp.get_order(), self.source.get_order())

    def test_get_order_over_resampled_values(self):
        rp = ResampledPredictor(self.source, [2, 2, 0], [1, 0])
        # values: [2.0, 2.0, 3.0, 4.0, 5.0]
        assert rp.get_order(">").tolist() == [0, 1, 2, 3, 4]
        assert rp.get_order("<").tolist() == [4, 3, 2, 0, 1]

    def test_pooled_idx(self):
        rp = ResampledPredictor(self.source, [2, 2, 0], [1, 0])
        assert rp.pooled_idx.tolist() == [2, 2, 0, 4, 3]

    def test_source_not_mutated(self):
        controls = np.array([3.0, 1.0, 2.0])
        source = Predictor(controls, [5.0, 4.0])
        ResampledPredictor(source, [2, 2, 0], [1, 1])
        np.testing.assert_array_equal(controls, [3.0, 1.0, 2.0])

    def test_index_arrays_read_only(self):
        rp = ResampledPredictor(self.source, [2, 2, 0], [1, 1])
        with pytest.raises(ValueError):
            rp.controls_idx[0] = 1
        with pytest.raises(ValueError):
            rp.cases[0] = 1.0

    def test_validate_accepts_good_indices(self):
        rp = ResampledPredictor(self.source, [2, 2, 0], [1, 1], validate=True)
        assert rp.n_total == 5

    def test_validate_rejects_wrong_length(self):
        with pytest.raises(ResampleIndexError, match="'controls_idx'.*3 entries"):
            ResampledPredictor(self.source, [0, 1], [0, 1], validate=True)

    def test_validate_rejects_out_of_domain(self):
        with pytest.raises(ResampleIndexError, match="'cases_idx' values"):
            ResampledPredictor(self.source, [0, 1, 2], [0, 2], validate=True)

    def test_validate_rejects_negative(self):
        with pytest.raises(ResampleIndexError, match="'controls_idx' values"):
            ResampledPredictor(self.source, [0, -1, 2], [0, 1], validate=True)

    def test_repr(self):
        rp = ResampledPredictor(self.source, [0, 1, 2], [0, 1])
        assert "n_controls=3" in repr(rp)
        assert "strategy=None" in repr(rp)


class TestStratifiedResample:
    """Tests for stratified ResampledPredictor construction."""

    def test_indices_in_group_domains(self):
        source = _predictor(30, 20)
        rp = ResampledPredictor.stratified(source, random_state=0)
        assert rp.controls_idx.shape == (30,)
        assert rp.cases_idx.shape == (20,)
        assert rp.controls_idx.min() >= 0 and rp.controls_idx.max() < 30
        assert rp.cases_idx.min() >= 0 and rp.cases_idx.max() < 20
        assert rp.strategy is ResampleStrategy.STRATIFIED

    def test_values_drawn_from_own_group(self):
        source = _predictor(30, 20)
        rp = resample(source, "stratified", random_state=1)
        assert set(rp.controls.tolist()) <= set(source.controls.tolist())
        assert set(rp.cases.tolist()) <= set(source.cases.tolist())

    def test_indexing_matches_materialised(self):
        source = _predictor(12, 7)
        rp = resample(source, ResampleStrategy.STRATIFIED, random_state=2)
        expected = np.concatenate([rp.controls, rp.cases])
        np.testing.assert_array_equal([rp[i] for i in range(rp.n_total)], expected)
        np.testing.assert_array_equal(rp.values, expected)

    def test_reproducible(self):
        source = _predictor()
        a = resample(source, "stratified", random_state=42)
        b = resample(source, "stratified", random_state=42)
        np.testing.assert_array_equal(a.controls_idx, b.controls_idx)
        np.testing.assert_array_equal(a.cases_idx, b.cases_idx)
        np.testing.assert_array_equal(a.values, b.values)

    def test_generator_is_advanced(self):
        source = _predictor()
        rng = np.random.default_rng(7)
        a = resample(source, "stratified", random_state=rng)
        b = resample(source, "stratified", random_state=rng)
        assert not np.array_equal(a.controls_idx, b.controls_idx)

    def test_reads_are_idempotent(self):
        rp = resample(_predictor(), "stratified", random_state=3)
        first = rp.controls.copy(), rp.cases.copy()
        for _ in range(3):
            np.testing.assert_array_equal(rp.controls, first[0])
            np.testing.assert_array_equal(rp.cases, first[1])

    def test_order_is_monotone(self):
        rp = resample(_predictor(), "stratified", random_state=4)
        order = rp.get_order(">")
        assert sorted(order.tolist()) == list(range(rp.n_total))
        assert np.all(np.diff(rp.values[order]) >= 0)


class TestNonStratifiedResample:
    """Tests for non-stratified ResampledPredictor construction."""

    def test_group_sizes_preserved(self):
        source = _predictor(30, 20)
        rp = ResampledPredictor.non_stratified(source, random_state=0)
        assert rp.n_controls == 30
        assert rp.n_cases == 20
        assert rp.controls.shape == (30,)
        assert rp.cases.shape == (20,)
        assert rp.strategy is ResampleStrategy.NON_STRATIFIED

    def test_values_drawn_from_pool(self):
        source = _predictor(30, 20)
        rp = resample(source, "non_stratified", random_state=1)
        assert set(rp.values.tolist()) <= set(source.values.tolist())

    def test_indexing_resolves_pooled_draws(self):
        source = _predictor(15, 10)
        rp = resample(source, "non_stratified", random_state=2)
        np.testing.assert_array_equal(rp.values, source.values[rp.pooled_idx])
        np.testing.assert_array_equal(
            [rp[i] for i in range(rp.n_total)], source.values[rp.pooled_idx]
        )

    def test_reproducible(self):
        source = _predictor()
        a = resample(source, "non_stratified", random_state=42)
        b = resample(source, "non_stratified", random_state=42)
        np.testing.assert_array_equal(a.pooled_idx, b.pooled_idx)
        np.testing.assert_array_equal(a.values, b.values)

    def test_nested_resampling(self):
        source = _predictor(10, 10)
        first = resample(source, "non_stratified", random_state=5)
        second = resample(first, "stratified", random_state=6)
        assert second.source is first
        assert set(second.values.tolist()) <= set(source.values.tolist())

    def test_rebuild_with_validation(self):
        """A drawn replicate passes validation when rebuilt from its indices."""
        source = Predictor(np.arange(5.0), np.arange(5.0, 12.0))
        rp = resample(source, "non_stratified", random_state=0)
        rebuilt = ResampledPredictor(
            source,
            rp.controls_idx,
            rp.cases_idx,
            validate=True,
            strategy=ResampleStrategy.NON_STRATIFIED,
        )
        np.testing.assert_array_equal(rebuilt.values, rp.values)
        np.testing.assert_array_equal(rebuilt.pooled_idx, rp.pooled_idx)

    def test_cross_group_indices_need_strategy(self):
        source = Predictor(np.arange(3.0), np.arange(3.0, 5.0))
        ResampledPredictor(
            source, [4, 0, 2], [-3, 1],
            validate=True, strategy=ResampleStrategy.NON_STRATIFIED,
        )
        with pytest.raises(ResampleIndexError, match=r"\[0, 3\)"):
            ResampledPredictor(source, [4, 0, 2], [0, 1], validate=True)

    @pytest.mark.parametrize(
        "controls_idx, cases_idx, match",
        [
            ([5, 0, 0], [0, 0], r"'controls_idx' values must lie in \[0, 5\)"),
            ([0, 0, 0], [-4, 0], r"'cases_idx' values must lie in \[-3, 2\)"),
            ([0, 0, 0], [0, 2], r"'cases_idx' values must lie in \[-3, 2\)"),
        ],
    )
    def test_cross_group_bounds_enforced(self, controls_idx, cases_idx, match):
        source = Predictor(np.arange(3.0), np.arange(3.0, 5.0))
        with pytest.raises(ResampleIndexError, match=match):
            ResampledPredictor(
                source, controls_idx, cases_idx,
                validate=True, strategy=ResampleStrategy.NON_STRATIFIED,
            )


class TestDegenerateGroups:
    """Resampling predictors with an empty group."""

    def test_stratified_empty_cases_warns(self):
        source = Predictor([1.0, 2.0, 3.0], [])
        with pytest.warns(UserWarning, match="no cases"):
            rp = resample(source, "stratified", random_state=0)
        assert rp.cases.shape == (0,)
        assert rp.controls.shape == (3,)

    def test_non_stratified_empty_controls_warns(self):
        source = Predictor([], [1.0, 2.0])
        with pytest.warns(UserWarning, match="no controls"):
            rp = resample(source, "non_stratified", random_state=0)
        assert rp.controls.shape == (0,)
        assert rp.cases_idx.min() >= 0
