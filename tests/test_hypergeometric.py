"""Tests for the log-space hypergeometric distribution and log-factorial cache."""

import math
import threading

import numpy as np
import pytest
from scipy.stats import hypergeom

from complexeval.stats.hypergeometric import (
    DBL_EPSILON,
    HypergeometricDistribution,
    LogFactorialCache,
    log_cumulative,
    log_density,
    log_factorial,
)


class TestLogFactorialCache:
    """Tests for LogFactorialCache."""

    def test_seed_values(self):
        """ln(0!) and ln(1!) are both 0."""
        cache = LogFactorialCache()
        assert len(cache) == 2
        assert cache.log_factorial(0) == 0.0
        assert cache.log_factorial(1) == 0.0

    def test_recurrence(self):
        """value[n] = value[n-1] + ln(n)."""
        cache = LogFactorialCache()
        for n in range(2, 60):
            assert cache.log_factorial(n) == pytest.approx(
                cache.log_factorial(n - 1) + math.log(n)
            )

    def test_matches_lgamma(self):
        cache = LogFactorialCache()
        for n in (5, 17, 170, 1000, 25000):
            assert cache.log_factorial(n) == pytest.approx(math.lgamma(n + 1), rel=1e-12)

    def test_grows_on_demand_only(self):
        """Cache extends up to the requested index and never shrinks."""
        cache = LogFactorialCache()
        cache.log_factorial(100)
        assert len(cache) == 101

        cache.log_factorial(10)
        assert len(cache) == 101

    def test_cached_values_not_recomputed(self):
        cache = LogFactorialCache()
        first = cache.log_factorial(500)
        cache.log_factorial(2000)
        assert cache.log_factorial(500) == first

    def test_non_decreasing(self):
        cache = LogFactorialCache()
        values = [cache.log_factorial(n) for n in range(300)]
        assert all(b >= a for a, b in zip(values, values[1:]))

    def test_negative_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            LogFactorialCache().log_factorial(-1)

    def test_concurrent_growth(self):
        """Concurrent lookups leave a complete, consistent table."""
        cache = LogFactorialCache()
        errors = []

        def worker(limit):
            try:
                for n in range(0, limit, 7):
                    cache.log_factorial(n)
                cache.log_factorial(limit)
            except Exception as e:  # pragma: no cover - surfaced below
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(1000 + 250 * i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(cache) == 1000 + 250 * 7 + 1
        for n in (0, 1, 2, 999, 1500, 2750):
            assert cache.log_factorial(n) == pytest.approx(math.lgamma(n + 1), rel=1e-12)

    def test_module_level_function(self):
        assert log_factorial(0) == 0.0
        assert log_factorial(6) == pytest.approx(math.log(720))


class TestLogDensity:
    """Tests for HypergeometricDistribution.log_density()."""

    @pytest.fixture
    def engine(self):
        return HypergeometricDistribution()

    def test_known_value(self, engine):
        """C(5,2) C(5,2) / C(10,4) = 100 / 210."""
        result = engine.log_density(2, 5, 5, 4)
        assert math.exp(result) == pytest.approx(100 / 210)

    @pytest.mark.parametrize("hits,white,black,draws", [
        (6, 5, 5, 8),   # more white hits than white balls
        (3, 5, 5, 2),   # more hits than drawings
        (0, 5, 3, 4),   # more black draws than black balls
    ])
    def test_infeasible_is_negative_infinity(self, engine, hits, white, black, draws):
        assert engine.log_density(hits, white, black, draws) == -math.inf

    @pytest.mark.parametrize("hits,white,black,draws", [
        (2, 5, 5, 4),
        (0, 7, 3, 3),
        (4, 20, 13, 9),
        (11, 40, 60, 30),
    ])
    def test_color_swap_symmetry(self, engine, hits, white, black, draws):
        assert engine.log_density(hits, white, black, draws) == pytest.approx(
            engine.log_density(draws - hits, black, white, draws)
        )

    @pytest.mark.parametrize("white,black,draws", [
        (5, 5, 4),
        (12, 30, 15),
        (100, 250, 60),
    ])
    def test_matches_scipy(self, engine, white, black, draws):
        total = white + black
        for hits in range(0, min(white, draws) + 1):
            if draws - hits > black:
                continue
            expected = hypergeom.logpmf(hits, total, white, draws)
            assert engine.log_density(hits, white, black, draws) == pytest.approx(expected, rel=1e-9)

    def test_large_urn_stays_finite(self, engine):
        """Log space avoids overflow for urns far beyond 170!."""
        result = engine.log_density(50, 10000, 10000, 100)
        assert np.isfinite(result)
        assert result == pytest.approx(hypergeom.logpmf(50, 20000, 10000, 100), rel=1e-9)

    def test_densities_sum_to_one(self, engine):
        white, black, draws = 8, 11, 7
        total = sum(math.exp(engine.log_density(h, white, black, draws)) for h in range(draws + 1))
        assert total == pytest.approx(1.0)

    def test_module_level_function(self):
        assert math.exp(log_density(2, 5, 5, 4)) == pytest.approx(100 / 210)


class TestLogCumulative:
    """Tests for HypergeometricDistribution.log_cumulative()."""

    @pytest.fixture
    def engine(self):
        return HypergeometricDistribution()

    @pytest.mark.parametrize("white,black,draws", [
        (5, 5, 4),
        (10, 15, 12),
        (40, 160, 25),
    ])
    def test_lower_tail_matches_scipy(self, engine, white, black, draws):
        total = white + black
        for hits in range(max(0, draws - black), min(white, draws) + 1):
            result = engine.log_cumulative(hits, white, black, draws, lower_tail=True)
            assert math.exp(result) == pytest.approx(
                hypergeom.cdf(hits, total, white, draws), rel=1e-9
            )

    @pytest.mark.parametrize("white,black,draws", [
        (5, 5, 4),
        (10, 15, 12),
        (40, 160, 25),
    ])
    def test_upper_tail_matches_scipy(self, engine, white, black, draws):
        total = white + black
        for hits in range(max(0, draws - black), min(white, draws)):
            result = engine.log_cumulative(hits, white, black, draws, lower_tail=False)
            assert math.exp(result) == pytest.approx(
                hypergeom.sf(hits, total, white, draws), rel=1e-9
            )

    def test_lower_tail_non_decreasing(self, engine):
        white, black, draws = 10, 15, 12
        values = [
            math.exp(engine.log_cumulative(h, white, black, draws))
            for h in range(0, min(white, draws) + 1)
        ]
        assert all(b >= a - 1e-12 for a, b in zip(values, values[1:]))

    def test_full_range_is_certain(self, engine):
        """P(X <= draws) = 1."""
        assert engine.log_cumulative(4, 5, 5, 4) == pytest.approx(0.0, abs=1e-12)

    def test_negative_hits_return_zero(self, engine):
        """A negative hit count returns log(1) = 0 by convention."""
        assert engine.log_cumulative(-1, 5, 5, 4) == 0.0

    def test_upper_tail_at_draws_returns_zero(self, engine):
        """hits = draws maps to -1 after the tail transform, giving 0."""
        assert engine.log_cumulative(4, 5, 5, 4, lower_tail=False) == 0.0

    @pytest.mark.parametrize("hits,white,black,draws", [
        (1, -1, 5, 3),        # negative white balls
        (1, 5, -2, 3),        # negative black balls
        (1, 5, 5, 11),        # more draws than balls
        (1, math.inf, 5, 3),  # infinite population
    ])
    def test_invalid_parameters_are_nan(self, engine, hits, white, black, draws):
        assert math.isnan(engine.log_cumulative(hits, white, black, draws))

    def test_negative_draws_are_nan(self, engine):
        """Upper tail keeps hits non-negative so the draws check is reached."""
        assert math.isnan(engine.log_cumulative(-5, 5, 5, -1, lower_tail=False))

    def test_tiny_upper_tail_does_not_underflow(self, engine):
        """Log p-values far below double range stay finite."""
        result = engine.log_cumulative(299, 300, 20000, 300, lower_tail=False)
        assert np.isfinite(result)
        assert result < math.log(1e-300)

    def test_shared_cache_between_engines(self):
        cache = LogFactorialCache()
        a = HypergeometricDistribution(cache)
        b = HypergeometricDistribution(cache)
        a.log_density(10, 50, 50, 20)
        assert len(cache) == 101
        assert b.cache is cache

    def test_module_level_function(self):
        assert math.exp(log_cumulative(2, 5, 5, 4)) == pytest.approx(
            hypergeom.cdf(2, 10, 5, 4)
        )

    def test_epsilon_constant(self):
        assert DBL_EPSILON == np.finfo(np.float64).eps
