import random

import pytest

from krushka.config.settings import SpawnSettings
from krushka.game.obstacles import Obstacle, ObstacleStream, ObstacleType

from conftest import ScriptedRandom

PIT = ObstacleType.PIT
FIRE = ObstacleType.FIRE


def make_stream(values, **overrides) -> ObstacleStream:
    return ObstacleStream(SpawnSettings(**overrides), ScriptedRandom(values))


def test_failed_draw_spawns_nothing():
    stream = make_stream([0.9])
    assert stream.spawn(0.5) is None
    assert len(stream) == 0


def test_first_spawn_enters_at_right_edge():
    stream = make_stream([0.0, 0.1])  # spawn draw, fire draw

    obstacle = stream.spawn(0.5)

    assert obstacle == Obstacle(FIRE, 800.0, 40.0, 40.0)
    assert stream.last_end_x == 840.0
    assert stream.recent_types == (FIRE,)


def test_pit_chosen_when_fire_draw_fails():
    stream = make_stream([0.0, 0.9, 0.1])

    obstacle = stream.spawn(1.0)

    assert obstacle.type is PIT
    assert (obstacle.width, obstacle.height) == (80.0, 100.0)
    assert stream.last_end_x == 880.0


def test_spawn_refused_below_min_spacing_regardless_of_draws():
    stream = make_stream([0.0])
    stream.add(FIRE, 800.0)

    assert stream.distance_from_last < stream.settings.min_spacing
    assert stream.spawn(1.0) is None
    assert len(stream) == 1


def test_tick_scrolls_and_prunes():
    stream = make_stream([0.9])
    stream.add(PIT, 100.0)
    stream.add(FIRE, 500.0)

    removed = stream.tick(150.0)

    assert removed == 0
    assert [o.x for o in stream] == [-50.0, 350.0]

    removed = stream.tick(40.0)
    assert removed == 1
    assert [o.type for o in stream] == [FIRE]
    # Watermark pulled left to the exiting pit's trailing edge
    assert stream.last_end_x == pytest.approx(-10.0)


def test_watermark_does_not_scroll_with_obstacles():
    stream = make_stream([0.9])
    stream.add(FIRE, 800.0)
    stream.tick(300.0)

    assert stream.obstacles[0].x == 500.0
    assert stream.last_end_x == 840.0


def test_alternates_after_single_obstacle():
    stream = make_stream([0.0, 0.9, 0.9])
    stream.add(PIT, 0.0)

    assert stream.spawn(1.0).type is FIRE


def test_two_pits_force_fire():
    stream = make_stream([0.0, 0.9, 0.9])
    stream.add(PIT, 0.0)
    stream.add(PIT, 0.0)

    assert stream.spawn(1.0).type is FIRE


@pytest.mark.parametrize("run_type", [PIT, FIRE])
def test_run_of_three_forces_other_type(run_type):
    # Only the spawn draw is consumed: low draws would otherwise pick fire/pit
    stream = make_stream([0.0])
    for _ in range(3):
        stream.add(run_type, 0.0)

    assert stream.spawn(1.0).type is run_type.other


def test_fire_sequence_continues():
    stream = make_stream([0.0, 0.0])
    stream.add(PIT, 0.0)
    stream.add(FIRE, 0.0)
    stream.add(FIRE, 0.0)

    assert stream.in_fire_sequence
    assert stream.spawn(1.0).type is FIRE


def test_safe_spacing_guard_suppresses_outside_fire_sequence():
    stream = make_stream([0.0, 0.1])
    stream.add(PIT, 0.0)
    stream.last_end_x = 500.0  # distance 300: above min, below safe

    assert stream.spawn(1.0) is None
    assert len(stream) == 1


def test_safe_spacing_guard_lets_fire_sequence_through():
    stream = make_stream([0.0])
    stream.add(FIRE, 0.0)
    stream.add(FIRE, 0.0)
    stream.last_end_x = 500.0

    obstacle = stream.spawn(1.0)
    assert obstacle is not None and obstacle.type is FIRE


def test_first_obstacle_uniform_choice():
    assert make_stream([0.0, 0.9, 0.9, 0.3]).spawn(1.0).type is PIT
    assert make_stream([0.0, 0.9, 0.9, 0.7]).spawn(1.0).type is FIRE


def test_remove_at_and_reset():
    stream = make_stream([0.9])
    stream.add(PIT, 10.0)
    stream.add(FIRE, 400.0)

    removed = stream.remove_at(0)
    assert removed.type is PIT
    assert [o.type for o in stream] == [FIRE]

    stream.reset()
    assert len(stream) == 0
    assert stream.recent_types == ()
    assert stream.last_end_x == stream.settings.initial_last_end_x


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_long_run_spacing_and_run_length(seed):
    stream = ObstacleStream(SpawnSettings(), random.Random(seed))
    s = stream.settings
    spawned = []

    for _ in range(20000):
        previous_end = stream.last_end_x
        in_sequence = stream.in_fire_sequence
        obstacle = stream.spawn(0.05)
        if obstacle is not None:
            gap = obstacle.x - previous_end
            assert gap >= s.min_spacing or (in_sequence and gap >= s.fire_sequence_spacing)
            spawned.append(obstacle.type)
        stream.tick(3.0)

    assert len(spawned) > 20

    run = 1
    for previous, current in zip(spawned, spawned[1:]):
        run = run + 1 if current is previous else 1
        assert run <= 3


def test_safe_spacing_guard_applies_without_history():
    stream = make_stream([0.0, 0.1])
    stream.last_end_x = 500.0

    assert stream.spawn(1.0) is None
    assert stream.recent_types == ()
