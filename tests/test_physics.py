import pytest

from krushka.config.settings import PhysicsSettings
from krushka.game.physics import PhysicsBody


def test_new_body_is_grounded(body, settings):
    assert body.y == settings.physics.ground_y
    assert body.on_ground and not body.is_jumping
    assert body.charge_power == 0.0
    assert body.bounds() == (body.x, body.y - body.height, body.width, body.height)


def test_charge_is_triangle_wave(fast_charge_body):
    body = fast_charge_body
    assert body.start_charge()

    powers = []
    for _ in range(9):
        body.tick()
        powers.append(body.charge.power)

    assert powers == [0.25, 0.5, 0.75, 1.0, 0.75, 0.5, 0.25, 0.0, 0.25]
    assert body.on_ground


def test_charge_stays_bounded_and_reverses_only_at_bounds(body):
    body.start_charge()
    previous_direction = body.charge.direction

    for _ in range(500):
        body.tick()
        power = body.charge.power
        assert 0.0 <= power <= 1.0
        if body.charge.direction != previous_direction:
            assert power in (0.0, 1.0)
            previous_direction = body.charge.direction


def test_advance_without_charging_resets_power(body):
    body.charge.power = 0.6
    body.charge.direction = -1
    body.advance_charge()
    assert body.charge.power == 0.0
    assert body.charge.direction == 1


def test_start_charge_refused_in_air(body):
    body.quick_jump()
    assert not body.start_charge()
    assert not body.charge.charging


def test_release_at_zero_power_gives_min_strength(body, settings):
    body.start_charge()
    assert body.release_jump()
    assert body.velocity_y == settings.physics.jump_strength_min
    assert body.is_jumping and not body.on_ground
    assert not body.charge.charging
    assert body.charge.power == 0.0


def test_release_without_charge_still_jumps(body, settings):
    assert body.release_jump()
    assert body.velocity_y == settings.physics.jump_strength_min


def test_release_at_full_power_gives_max_strength(body, settings):
    body.start_charge()
    body.charge.power = 1.0
    body.release_jump()
    assert body.velocity_y == settings.physics.jump_strength_max


def test_jump_velocity_interpolates_and_clamps(body):
    assert body.jump_velocity(0.5) == pytest.approx(-21.5)
    assert body.jump_velocity(-3.0) == body.jump_velocity(0.0)
    assert body.jump_velocity(7.0) == body.jump_velocity(1.0)


def test_release_in_air_cancels_charge_without_launch(body):
    body.start_charge()
    body.launch(-10.0)
    velocity = body.velocity_y

    assert not body.release_jump()
    assert not body.charge.charging
    assert body.charge.power == 0.0
    assert body.velocity_y == velocity


def test_gravity_integration(body, settings):
    body.launch(-15.0)
    body.tick()
    assert body.velocity_y == pytest.approx(-15.0 + settings.physics.gravity)
    assert body.y == pytest.approx(settings.physics.ground_y - 15.0 + settings.physics.gravity)
    assert not body.on_ground


def test_jump_lands_back_on_ground(body, settings):
    body.quick_jump()
    for _ in range(200):
        body.tick()
        if body.on_ground:
            break

    assert body.on_ground and not body.is_jumping
    assert body.y == settings.physics.ground_y
    assert body.velocity_y == 0.0


def test_held_charge_survives_landing(body):
    body.start_charge()
    body.launch(-5.0)
    for _ in range(50):
        body.tick()

    assert body.on_ground
    assert body.charge.charging

    body.tick()
    assert body.charge.power > 0.0


def test_launch_refused_when_airborne(body):
    assert body.launch(-12.0)
    assert not body.launch(-20.0)
    assert body.velocity_y == -12.0


def test_custom_constants():
    body = PhysicsBody(PhysicsSettings(jump_strength_min=-10.0, jump_strength_max=-20.0))
    body.quick_jump()
    assert body.velocity_y == -10.0
