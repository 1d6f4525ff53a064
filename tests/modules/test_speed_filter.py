import math
import random
import unittest

import pytest

from tripclean.core.point import TripPoint
from tripclean.core.route import Route
from tripclean.modules.cleaning.speed_filter import RouteCleaner, haversine_distance, implied_speed

ONE_DEGREE_KM = 6367.0 * math.pi / 180.0


class TestHaversineDistance(unittest.TestCase):
    def test_identical_points(self):
        a = TripPoint(lat=51.512, lon=-0.14, timestamp=0)
        self.assertEqual(haversine_distance(a, a), 0.0)

    def test_one_degree_of_longitude_on_equator(self):
        a = TripPoint(lat=0.0, lon=0.0, timestamp=0)
        b = TripPoint(lat=0.0, lon=1.0, timestamp=0)
        self.assertAlmostEqual(haversine_distance(a, b), ONE_DEGREE_KM)
        self.assertAlmostEqual(haversine_distance(a, b), 111.125, places=2)

    def test_one_degree_of_latitude(self):
        a = TripPoint(lat=10.0, lon=20.0, timestamp=0)
        b = TripPoint(lat=11.0, lon=20.0, timestamp=0)
        self.assertAlmostEqual(haversine_distance(a, b), ONE_DEGREE_KM)

    def test_antipodal_points(self):
        a = TripPoint(lat=0.0, lon=0.0, timestamp=0)
        b = TripPoint(lat=0.0, lon=180.0, timestamp=0)
        self.assertAlmostEqual(haversine_distance(a, b), 6367.0 * math.pi, places=6)

    def test_symmetry_and_non_negativity(self):
        rng = random.Random(7)
        for _ in range(200):
            a = TripPoint(lat=rng.uniform(-90, 90), lon=rng.uniform(-180, 180), timestamp=0)
            b = TripPoint(lat=rng.uniform(-90, 90), lon=rng.uniform(-180, 180), timestamp=0)
            d_ab = haversine_distance(a, b)
            self.assertAlmostEqual(d_ab, haversine_distance(b, a))
            self.assertGreaterEqual(d_ab, 0.0)
            self.assertLessEqual(d_ab, 6367.0 * math.pi + 1e-6)


class TestImpliedSpeed(unittest.TestCase):
    def test_km_per_hour(self):
        self.assertAlmostEqual(implied_speed(10.0, 3600), 10.0)
        self.assertAlmostEqual(implied_speed(1.0, 60), 60.0)

    def test_zero_distance(self):
        self.assertEqual(implied_speed(0.0, 10), 0.0)

    def test_zero_elapsed_time_is_infinite(self):
        self.assertEqual(implied_speed(5.0, 0), math.inf)
        self.assertEqual(implied_speed(0.0, 0), math.inf)

    def test_negative_elapsed_time_is_infinite(self):
        self.assertEqual(implied_speed(5.0, -10), math.inf)


def make_points(*rows):
    return [TripPoint(lat=lat, lon=lon, timestamp=t) for lat, lon, t in rows]


def test_default_speed_limit():
    assert RouteCleaner().speed_limit == 80.0


@pytest.mark.parametrize("bad", [0, -5, float('nan'), float('inf')])
def test_speed_limit_must_be_positive_and_finite(bad):
    with pytest.raises(ValueError):
        RouteCleaner(speed_limit=bad)
    cleaner = RouteCleaner()
    with pytest.raises(ValueError):
        cleaner.speed_limit = bad
    assert cleaner.speed_limit == 80.0


def test_speed_limit_can_change_before_pass():
    points = make_points((0.0, 0.0, 0), (0.0, 0.01, 10))  # ~1.1 km in 10 s, ~400 km/h
    cleaner = RouteCleaner()
    cleaner.clean(points)
    assert not points[1].valid

    cleaner.speed_limit = 500
    cleaner.clean(points)
    assert points[1].valid


def test_empty_sequence():
    assert RouteCleaner().clean([]) == []


def test_single_point_is_kept():
    points = make_points((12.0, 34.0, 0))
    RouteCleaner().clean(points)
    assert points[0].valid


def test_first_point_always_kept_even_if_bogus():
    points = make_points((89.0, 179.0, 0), (0.0, 0.0, 1), (0.0, 0.0, 2))
    RouteCleaner().clean(points)
    assert points[0].valid
    assert not points[1].valid
    assert not points[2].valid


def test_clean_returns_same_object_and_mutates_in_place():
    route = Route(points=make_points((0.0, 0.0, 0), (0.0, 0.0, 10), (0.0, 1.0, 11)))
    original = list(route.points)
    result = RouteCleaner().clean(route)
    assert result is route
    assert all(a is b for a, b in zip(route.points, original))


def test_three_point_scenario():
    points = make_points((0.0, 0.0, 0), (0.0, 0.0, 10), (0.0, 1.0, 11))
    RouteCleaner(speed_limit=80).clean(points)
    assert [p.valid for p in points] == [True, True, False]


def test_rejection_does_not_advance_reference():
    # P2 is unreachable from P1; P3 is reachable from P1 but not from P2.
    points = make_points((0.0, 0.0, 0), (0.0, 1.0, 10), (0.0, 0.01, 3600))
    assert implied_speed(haversine_distance(points[1], points[2]), 3590) > 80

    RouteCleaner().clean(points)
    assert [p.valid for p in points] == [True, False, True]


def test_run_of_bogus_points_is_rejected():
    points = make_points(
        (0.0, 0.0, 0),
        (10.0, 10.0, 60),
        (10.0, 10.0, 120),
        (10.0, 10.0, 130),
        (0.0, 0.005, 180),
    )
    RouteCleaner().clean(points)
    assert [p.valid for p in points] == [True, False, False, False, True]


def test_identical_timestamps_reject_later_point():
    points = make_points((0.0, 0.0, 100), (0.0, 0.001, 100))
    RouteCleaner().clean(points)
    assert [p.valid for p in points] == [True, False]


def test_identical_fix_with_same_timestamp_is_rejected():
    points = make_points((0.0, 0.0, 100), (0.0, 0.0, 100))
    RouteCleaner().clean(points)
    assert [p.valid for p in points] == [True, False]


def test_out_of_order_timestamp_is_rejected():
    points = make_points((0.0, 0.0, 100), (0.0, 0.0, 50), (0.0, 0.0, 200))
    RouteCleaner().clean(points)
    assert [p.valid for p in points] == [True, False, True]


def test_speed_exactly_at_limit_is_kept():
    points = make_points((0.0, 0.0, 0), (0.0, 0.5, 3600))
    limit = implied_speed(haversine_distance(points[0], points[1]), 3600)
    RouteCleaner(speed_limit=limit).clean(points)
    assert points[1].valid


def noisy_trip(seed: int, n: int = 300):
    rng = random.Random(seed)
    points = []
    lat, lon, t = 51.5, -0.14, 0
    for _ in range(n):
        t += rng.choice([0, 1, 5, 10, 30])
        if rng.random() < 0.15:
            points.append(TripPoint(lat=lat + rng.uniform(-1, 1), lon=lon + rng.uniform(-1, 1), timestamp=t))
        else:
            lat += rng.uniform(-0.0001, 0.0001)
            lon += rng.uniform(-0.0001, 0.0001)
            points.append(TripPoint(lat=lat, lon=lon, timestamp=t))
    return points


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_threshold_enforced_against_last_accepted(seed):
    points = noisy_trip(seed)
    cleaner = RouteCleaner()
    cleaner.clean(points)

    last = points[0]
    assert last.valid
    for p in points[1:]:
        speed = implied_speed(haversine_distance(last, p), p.timestamp - last.timestamp)
        assert p.valid == (speed <= cleaner.speed_limit)
        if p.valid:
            last = p


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_second_pass_over_kept_points_rejects_nothing(seed):
    points = noisy_trip(seed)
    cleaner = RouteCleaner()
    cleaner.clean(points)
    kept = [TripPoint(lat=p.lat, lon=p.lon, timestamp=p.timestamp) for p in points if p.valid]
    assert 0 < len(kept) < len(points)

    cleaner.clean(kept)
    assert all(p.valid for p in kept)


def test_cleaning_twice_gives_same_flags():
    points = noisy_trip(4)
    cleaner = RouteCleaner()
    cleaner.clean(points)
    first = [p.valid for p in points]
    cleaner.clean(points)
    assert [p.valid for p in points] == first


def test_nan_point_is_rejected_and_never_becomes_reference():
    points = make_points((0.0, 0.0, 0), (float('nan'), 0.0, 10), (50.0, 50.0, 20), (0.0, 0.0001, 30))
    RouteCleaner().clean(points)
    assert [p.valid for p in points] == [True, False, False, True]


@pytest.mark.parametrize("bad", ["fast", None])
def test_non_numeric_speed_limit_is_a_value_error(bad):
    with pytest.raises(ValueError):
        RouteCleaner(speed_limit=bad)
