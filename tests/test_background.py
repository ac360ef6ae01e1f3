from rpsarena.background import (
    BACKGROUND_SPRITE_SIZE,
    GENERATION_DELAY,
    SPRITE_TYPES,
    SPRITES_PER_GENERATION,
    Background,
    background,
)
from rpsarena.config import SCREEN_HEIGHT, SCREEN_WIDTH
from rpsarena.sprites import RotatingSprite


def _still_sprite(position):
    sprite = RotatingSprite("backgroundSprite", 2, BACKGROUND_SPRITE_SIZE, (0, 0), (0, 0), 0)
    sprite.set_position(position)
    return sprite


def test_starts_empty():
    assert Background().sprites == []


def test_generation_after_delay():
    bg = Background()
    bg.update(GENERATION_DELAY)
    assert len(bg.sprites) == SPRITES_PER_GENERATION
    assert bg.generation_timer == 0.0


def test_no_generation_before_delay():
    bg = Background()
    bg.update(GENERATION_DELAY / 2)
    assert bg.sprites == []


def test_timer_accumulates():
    bg = Background()
    bg.update(0.3)
    bg.update(0.3)
    assert len(bg.sprites) == SPRITES_PER_GENERATION


def test_zero_delta_keeps_fresh_sprites():
    bg = Background()
    bg.update(GENERATION_DELAY)
    bg.update(0.0)
    assert len(bg.sprites) == SPRITES_PER_GENERATION


def test_generated_sprites_stay_in_bounds():
    bg = Background()
    for _ in range(20):
        bg.sprites.clear()
        bg.update(GENERATION_DELAY)
        for sprite in bg.sprites:
            x, y = sprite.position
            assert -SCREEN_WIDTH <= x <= SCREEN_WIDTH
            if x < -BACKGROUND_SPRITE_SIZE[0] - 10:
                assert 0 <= y <= SCREEN_HEIGHT
            else:
                assert -BACKGROUND_SPRITE_SIZE[1] - 100 <= y <= -BACKGROUND_SPRITE_SIZE[1]
            assert 0 <= sprite.frame <= SPRITE_TYPES
            assert 50 <= sprite.velocity.x <= 300
            assert 50 <= sprite.velocity.y <= 300
            assert -30 <= sprite.rotation_speed <= 30


def test_sprites_past_right_or_bottom_are_removed():
    bg = Background()
    inside = _still_sprite((100, 100))
    bg.sprites.extend(
        [inside, _still_sprite((SCREEN_WIDTH + 50, 10)), _still_sprite((10, SCREEN_HEIGHT + 50))]
    )
    bg.update(0.01)
    assert bg.sprites == [inside]


def test_sprites_above_and_left_are_kept():
    bg = Background()
    above = _still_sprite((10, -50))
    left = _still_sprite((-50, 10))
    bg.sprites.extend([above, left])
    bg.update(0.01)
    assert bg.sprites == [above, left]


def test_clear_removes_sprites():
    bg = Background()
    bg.update(GENERATION_DELAY)
    bg.clear()
    assert bg.sprites == []


def test_shared_instance_keeps_state():
    shared = background()
    assert isinstance(shared, Background)
    shared.clear()
    shared.generation_timer = 0.0
    shared.update(GENERATION_DELAY)
    try:
        assert len(background().sprites) == SPRITES_PER_GENERATION
    finally:
        shared.clear()
    assert background().sprites == []