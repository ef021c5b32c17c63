import random

import pytest

from quadsim.config import AtlasConfig, CircleShape, EmitterConfig, RectangleShape
from quadsim.curves import Color, ColorCurve, Curve
from quadsim.emitter import Emitter, EmittersCache
from quadsim.geometry import Vec2


def burst(**kwargs):
    base = dict(explosiveness=1.0, amount=3, lifetime=10.0)
    base.update(kwargs)
    return EmitterConfig(**base)


def make(config):
    return Emitter(config, random.Random(1234))


def test_full_explosiveness_spawns_whole_amount():
    config = burst(amount=5)
    emitter = make(config)
    emitter.update(Vec2(0.0, 0.0), 0.1)
    assert len(emitter.particles()) == config.amount


def test_amount_zero_spawns_nothing():
    emitter = make(EmitterConfig(amount=0))
    emitter.update(Vec2(0.0, 0.0), 0.5)
    assert emitter.particles() == []


def test_particles_move_along_initial_direction():
    config = burst()
    emitter = make(config)
    origin = Vec2(10.0, 20.0)
    dt = 0.1
    emitter.update(origin, dt)
    expected = origin + config.initial_direction * config.initial_velocity * dt
    for particle in emitter.particles():
        assert particle.position.x == pytest.approx(expected.x)
        assert particle.position.y == pytest.approx(expected.y)


def test_local_coords_ignore_emitter_position():
    config = burst(local_coords=True)
    emitter = make(config)
    dt = 0.1
    emitter.update(Vec2(100.0, 100.0), dt)
    expected = config.initial_direction * config.initial_velocity * dt
    for particle in emitter.particles():
        assert particle.position.x == pytest.approx(expected.x)
        assert particle.position.y == pytest.approx(expected.y)


def test_one_shot_stops_emitting_after_cycle():
    config = burst(one_shot=True)
    emitter = make(config)
    emitter.update(Vec2(0.0, 0.0), 0.1)
    assert emitter.config.emitting is False
    assert len(emitter.particles()) == config.amount


def test_particles_expire_after_lifetime():
    emitter = make(burst(one_shot=True, amount=2, lifetime=0.5))
    emitter.update(Vec2(0.0, 0.0), 0.3)
    assert len(emitter.particles()) == 2
    emitter.update(Vec2(0.0, 0.0), 0.3)
    assert emitter.particles() == []


def test_emit_ignores_emitting_flag():
    emitter = make(EmitterConfig(emitting=False))
    emitter.emit(Vec2(1.0, 2.0), 3)
    particles = emitter.particles()
    assert len(particles) == 3
    assert all(p.position == Vec2(1.0, 2.0) for p in particles)


def test_not_emitting_means_no_particles():
    emitter = make(EmitterConfig(emitting=False))
    emitter.update(Vec2(0.0, 0.0), 1.0)
    assert emitter.particles() == []


def test_color_starts_at_curve_start():
    red = Color(1.0, 0.0, 0.0, 1.0)
    blue = Color(0.0, 0.0, 1.0, 1.0)
    emitter = make(burst(colors_curve=ColorCurve(start=red, mid=blue, end=blue)))
    emitter.update(Vec2(0.0, 0.0), 0.1)
    assert all(p.color == red for p in emitter.particles())


def test_color_follows_curve_over_life():
    red = Color(1.0, 0.0, 0.0, 1.0)
    blue = Color(0.0, 0.0, 1.0, 1.0)
    curve = ColorCurve(start=red, mid=blue, end=blue)
    emitter = make(burst(colors_curve=curve, lifetime=1.0))
    emitter.update(Vec2(0.0, 0.0), 0.2)
    emitter.update(Vec2(0.0, 0.0), 0.2)
    for particle in emitter.particles():
        expected = curve.at(0.2 / particle.lifetime)
        assert particle.color.r == pytest.approx(expected.r)
        assert particle.color.b == pytest.approx(expected.b)


def test_uv_without_atlas_covers_whole_texture():
    emitter = make(burst())
    emitter.update(Vec2(0.0, 0.0), 0.1)
    assert all(p.uv == (0.0, 0.0, 1.0, 1.0) for p in emitter.particles())


def test_atlas_uv_cell_size_and_frame_range():
    atlas = AtlasConfig.from_range(4, 4, range(8, 16))
    emitter = make(burst(atlas=atlas, lifetime=1.0))
    for _ in range(5):
        emitter.update(Vec2(0.0, 0.0), 0.15)
        for particle in emitter.particles():
            assert particle.uv[2] == pytest.approx(1.0 / atlas.n)
            assert particle.uv[3] == pytest.approx(1.0 / atlas.m)
            assert atlas.start_index <= particle.frame <= atlas.end_index


def test_size_curve_scales_initial_size():
    curve = Curve(points=((0.0, 0.5), (0.5, 1.0), (1.0, 0.0)))
    config = burst(size_curve=curve)
    emitter = make(config)
    emitter.update(Vec2(0.0, 0.0), 0.1)
    scale = curve.batch().get(0.0)
    assert all(p.size == pytest.approx(config.size * scale) for p in emitter.particles())


def test_gravity_accelerates_particles():
    config = burst(gravity=Vec2(0.0, 100.0))
    emitter = make(config)
    dt = 0.1
    emitter.update(Vec2(0.0, 0.0), dt)
    start = config.initial_direction * config.initial_velocity
    for particle in emitter.particles():
        assert particle.velocity.y == pytest.approx(start.y + config.gravity.y * dt)


def test_lifetime_randomness_shortens_lifetimes():
    config = burst(amount=20, lifetime_randomness=0.5)
    emitter = make(config)
    emitter.update(Vec2(0.0, 0.0), 0.01)
    for particle in emitter.particles():
        assert config.lifetime * 0.5 <= particle.lifetime <= config.lifetime


def test_reset_clears_particles():
    emitter = make(burst())
    emitter.update(Vec2(0.0, 0.0), 0.1)
    emitter.reset()
    assert emitter.particles() == []


def test_update_particle_mesh_rebuilds_on_next_update():
    emitter = make(burst())
    emitter.config.shape = CircleShape(4)
    emitter.update_particle_mesh()
    assert emitter.mesh == RectangleShape().mesh()
    emitter.update(Vec2(0.0, 0.0), 0.1)
    assert emitter.mesh == CircleShape(4).mesh()


def test_rebuild_size_curve():
    emitter = make(burst())
    assert emitter.batched_size_curve is None
    curve = Curve(points=((0.0, 1.0), (1.0, 0.0)))
    emitter.config.size_curve = curve
    emitter.rebuild_size_curve()
    assert emitter.batched_size_curve == curve.batch()


def test_cache_returns_finished_one_shot_emitter():
    cache = EmittersCache(burst(one_shot=True, amount=2), random.Random(7))
    cache.spawn(Vec2(5.0, 5.0))
    assert len(cache.active_emitters) == 1
    cache.update(0.1)
    assert cache.active_emitters == []
    cache.spawn(Vec2(1.0, 1.0))
    (emitter, pos), = cache.active_emitters
    assert emitter.config.emitting is True
    assert emitter.particles() == []
    assert pos == Vec2(1.0, 1.0)


def test_cache_continuous_emitter_stays_active_at_spawn_position():
    cache = EmittersCache(burst(), random.Random(7))
    cache.spawn(Vec2(5.0, 5.0))
    cache.update(0.1)
    (emitter, _), = cache.active_emitters
    particles = emitter.particles()
    assert len(particles) == 3
    assert all(p.position.x == pytest.approx(5.0) for p in particles)