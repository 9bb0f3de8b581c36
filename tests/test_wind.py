import pytest

from rotorsim.mathutil import Vector3
from rotorsim.wind import WindModel, WindParams


def steady_params(**kwargs):
    base = dict(
        wind_force_mean=2.0,
        wind_force_max=5.0,
        wind_direction_mean=Vector3(0.0, 3.0, 0.0),
        wind_gust_start=1.0,
        wind_gust_duration=2.0,
        wind_gust_force_mean=4.0,
        wind_gust_force_max=10.0,
        wind_gust_direction_mean=Vector3(0.0, 0.0, 7.0),
    )
    base.update(kwargs)
    return WindParams(**base)


def test_zero_variance_gives_mean_wind_along_normalized_direction():
    sample = WindModel(steady_params()).sample(0.0)
    assert sample.wind.length() == pytest.approx(2.0)
    assert sample.wind.normalized() == Vector3(0.0, 1.0, 0.0)


def test_strength_capped_at_max():
    sample = WindModel(steady_params(wind_force_mean=10.0)).sample(0.0)
    assert sample.wind.length() == pytest.approx(5.0)


def test_no_gust_outside_window():
    model = WindModel(steady_params())
    assert model.sample(0.5).gust == Vector3()
    assert model.sample(3.0).gust == Vector3()


def test_gust_inside_window():
    model = WindModel(steady_params())
    sample = model.sample(1.0)
    assert sample.gust.length() == pytest.approx(4.0)
    assert sample.force == sample.wind + sample.gust


def test_gust_capped_at_max():
    sample = WindModel(steady_params(wind_gust_force_mean=50.0)).sample(2.0)
    assert sample.gust.length() == pytest.approx(10.0)


def test_sample_metadata():
    params = steady_params(frame_id="odom", xyz_offset=Vector3(1.0, 0.0, 0.5))
    sample = WindModel(params).sample(1.5)
    assert sample.frame_id == "odom"
    assert sample.position == Vector3(1.0, 0.0, 0.5)
    assert sample.time_usec == 1500000


def test_same_seed_same_samples():
    params = steady_params(wind_force_variance=1.0, wind_direction_variance=0.5)
    a = WindModel(params, seed=42)
    b = WindModel(params, seed=42)
    assert [a.sample(t).wind for t in (0.0, 0.1, 0.2)] == [b.sample(t).wind for t in (0.0, 0.1, 0.2)]


def test_random_strength_never_exceeds_max():
    params = steady_params(wind_force_mean=4.5, wind_force_variance=4.0, wind_direction_variance=0.0)
    model = WindModel(params, seed=1)
    strengths = [model.sample(0.0).wind.length() for _ in range(200)]
    assert max(strengths) <= 5.0 + 1e-9
    assert len(set(strengths)) > 1


def test_topic_uses_namespace():
    assert WindParams(namespace="uav", wind_pub_topic="/wind").topic == "/uav/wind"