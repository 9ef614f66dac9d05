"""
Integration tests for the world pipeline.

Tests cover:
- Initialisation and configuration errors
- Spawning on the interval
- End-to-end capture of a satellite as a moon
- Recording a run
"""

import numpy as np
import pytest

from gravity_well.core import (
    World,
    SimConfig,
    ConfigurationError,
    Kind,
    OrbitBounds,
    SpawnEvent,
    DestroyEvent,
    CaptureEvent,
    SimulationRecording,
    run_simulation,
)


class TestInitialisation:

    def test_single_primary_at_center(self, world):
        assert world.counts() == {"primary": 1, "satellite": 0, "moon": 0}
        p = world.primary
        np.testing.assert_array_equal(world.store.pos[p], [500.0, 500.0])
        assert world.store.mass[p] == world.config.primary_mass
        assert world.store.radius[p] == world.config.primary_radius
        assert p not in world.store.vel
        assert p not in world.store.orbit

    @pytest.mark.parametrize("width,height", [(None, 100.0), (100.0, None), (0.0, 100.0), (100.0, -1.0)])
    def test_no_usable_region(self, width, height):
        with pytest.raises(ConfigurationError):
            World(config=SimConfig(width=width, height=height), rng=np.random.default_rng(0))

    def test_bad_constants(self):
        with pytest.raises(ConfigurationError):
            World(config=SimConfig(satellite_radius=0.0), rng=np.random.default_rng(0))
        with pytest.raises(ConfigurationError):
            World(config=SimConfig(spawn_interval=-1.0), rng=np.random.default_rng(0))

    def test_negative_dt_rejected(self, world):
        with pytest.raises(ValueError):
            world.step(-0.1)


class TestSpawning:

    def test_one_satellite_per_interval(self, still_world):
        for _ in range(9):
            still_world.step(0.1)
        assert still_world.store.count(Kind.SATELLITE) == 0
        still_world.step(0.1)
        assert still_world.store.count(Kind.SATELLITE) == 1

    def test_one_satellite_per_second_at_60_hz(self, still_world):
        for _ in range(59):
            still_world.step(1 / 60)
        assert still_world.store.count(Kind.SATELLITE) == 0
        still_world.step(1 / 60)
        assert still_world.store.count(Kind.SATELLITE) == 1


    def test_long_tick_spawns_once(self, still_world):
        still_world.step(3.5)
        assert still_world.store.count(Kind.SATELLITE) == 1

    def test_spawn_event_emitted(self, still_world):
        events = still_world.step(1.0)
        spawns = [e for e in events if isinstance(e, SpawnEvent)]
        # the primary from initialisation plus the scheduled satellite
        assert [e.kind for e in spawns] == [Kind.PRIMARY, Kind.SATELLITE]
        assert spawns[1].reason == "scheduled"
        assert spawns[1].t == pytest.approx(1.0)


class TestCollisionStage:

    def test_primary_hit_and_its_partner_both_removed(self, still_world):
        world = still_world
        store = world.store
        for offset in ((55.0, 0.0), (70.0, 0.0)):
            store.spawn(
                Kind.SATELLITE,
                pos=world.region.center + np.array(offset),
                vel=np.zeros(2),
                angular_velocity=0.0,
                mass=world.config.satellite_mass,
                radius=world.config.satellite_radius,
                orbit=OrbitBounds(),
            )
        store.drain_events()

        events = world.step(0.01)
        assert store.count(Kind.SATELLITE) == 0
        reasons = sorted(e.reason for e in events if isinstance(e, DestroyEvent))
        assert reasons == ["mutual_collision", "primary_collision"]


class TestEndToEnd:

    def test_satellite_becomes_moon(self, still_world):
        world = still_world
        store = world.store
        center = world.region.center

        world.step(1.0)
        assert world.counts() == {"primary": 1, "satellite": 1, "moon": 0}
        (sat,) = store.query(Kind.SATELLITE)
        assert store.orbit[sat].r_min is not None
        assert store.orbit[sat].r_max is None

        # closest approach
        store.pos[sat] = center + np.array([200.0, 0.0])
        store.vel[sat] = np.array([0.0, 0.0])
        world.step(0.01)
        assert store.orbit[sat].r_min == pytest.approx(200.0)
        assert world.counts()["satellite"] == 1

        # receding inside the region: the orbit closes and the satellite is captured
        store.pos[sat] = center + np.array([300.0, 0.0])
        store.vel[sat] = np.array([4.0, -2.0])
        store.angular_velocity[sat] = 0.75
        angle_before = store.angle[sat]
        events = world.step(0.01)

        assert world.counts() == {"primary": 1, "satellite": 0, "moon": 1}
        assert not store.is_alive(sat)
        (moon,) = store.query(Kind.MOON)
        np.testing.assert_allclose(store.pos[moon], center + np.array([300.04, -0.02]))
        np.testing.assert_allclose(store.vel[moon], [4.0, -2.0], atol=1e-9)
        assert store.angular_velocity[moon] == 0.75
        assert store.angle[moon] == pytest.approx(angle_before + 0.0075)
        assert store.mass[moon] == world.config.satellite_mass

        captures = [e for e in events if isinstance(e, CaptureEvent)]
        destroys = [e for e in events if isinstance(e, DestroyEvent)]
        assert len(captures) == 1
        d = np.hypot(300.04, 0.02)
        assert captures[0].r_min == pytest.approx(200.0)
        assert captures[0].r_max == pytest.approx(d)
        assert captures[0].eccentricity == pytest.approx((d - 200.0) / (d + 200.0))
        assert [(d.handle, d.reason) for d in destroys] == [(sat, "captured")]

    def test_moon_is_permanent(self, still_world):
        world = still_world
        moon = world.store.spawn(Kind.MOON, pos=np.array([-500.0, -500.0]), vel=np.array([-10.0, 0.0]),
                                 angular_velocity=0.0, mass=1.0, radius=10.0)
        for _ in range(20):
            world.step(0.05)
        assert world.store.is_alive(moon)
        np.testing.assert_allclose(world.store.vel[moon], [-10.0, 0.0])

    def test_satellite_falls_into_primary(self):
        config = SimConfig(width=1000.0, height=1000.0, spawn_interval=1000.0)
        world = World(config=config, rng=np.random.default_rng(0))
        center = world.region.center
        sat = world.store.spawn(Kind.SATELLITE, pos=center + np.array([0.0, 200.0]), vel=np.zeros(2),
                                angular_velocity=0.0, mass=config.satellite_mass,
                                radius=config.satellite_radius, orbit=OrbitBounds())
        reasons = {}
        for _ in range(2000):
            for e in world.step(0.01):
                if isinstance(e, DestroyEvent):
                    reasons[e.handle] = e.reason
            if sat in reasons:
                break
        assert reasons[sat] == "primary_collision"
        assert world.store.count(Kind.PRIMARY) == 1


class TestRun:

    def test_invariants_hold_over_a_run(self, world):
        for _ in range(600):
            world.step(1 / 60)
            assert world.store.count(Kind.PRIMARY) == 1
            for h in world.store.query(Kind.SATELLITE):
                world.store.orbit[h].check()
            for h in world.store.query(Kind.MOON):
                assert h not in world.store.orbit
            assert all(m > 0 for m in world.store.mass.values())

    def test_same_seed_same_run(self, config):
        a = World(config=config, rng=np.random.default_rng(99))
        b = World(config=config, rng=np.random.default_rng(99))
        for _ in range(300):
            a.step(1 / 30)
            b.step(1 / 30)
        assert a.counts() == b.counts()
        for h in a.store.query():
            np.testing.assert_array_equal(a.store.pos[h], b.store.pos[h])

    def test_recording_roundtrip(self, world, tmp_path):
        recording = run_simulation(world, n_steps=120, dt=1 / 30, log_interval=0)
        assert len(recording.frames) == 120
        assert recording.t_end == pytest.approx(4.0)
        assert world.primary in recording.static
        assert recording.static[world.primary].kind == "primary"

        types = [ev.type for ev in recording.iter_events()]
        assert types[0] == "SpawnEvent"
        assert types.count("SpawnEvent") >= 4

        path = tmp_path / "recording.pkl.xz"
        recording.save(path)
        loaded = SimulationRecording.load(path)
        assert loaded.times == recording.times
        last = loaded.frames[-1]
        assert set(last.entities) == set(world.store.query())

    def test_progress_printed(self, world, capsys):
        run_simulation(world, n_steps=10, dt=0.1, log_interval=5)
        out = capsys.readouterr().out
        assert "Simulated 0.500 seconds / 1.000 seconds..." in out
        assert "Satellites:" in out


class TestOutputs:

    def test_plot_draws_every_entity(self, world):
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        world.step(1.0)
        fig, ax = world.plot()
        # region outline plus one circle per entity
        assert len(ax.patches) == 1 + world.n_bodies
        plt.close(fig)

    def test_unique_path_keeps_compound_suffix(self, tmp_path):
        from gravity_well.utils.io import unique_path

        first = tmp_path / "recording.pkl.xz"
        assert unique_path(first) == first
        first.write_bytes(b"")
        assert unique_path(first).name == "recording_2.pkl.xz"
