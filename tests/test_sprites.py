import pygame
from pygame.math import Vector2

from rpsarena.config import DEFAULT_FONT_KEY, SCREEN_HEIGHT, SCREEN_WIDTH, ScreenSide
from rpsarena.sprites import (
    Button,
    MovingSprite,
    PointerState,
    RotatingSprite,
    Sprite,
    TextButton,
)
from rpsarena.text import measure_text


class _Pointer:
    def __init__(self, state):
        self.state = state

    def __call__(self):
        return self.state


def _button(pointer, on_click=lambda: None):
    return Button((100, 100), (50, 50), (0, 0), "default", on_click, pointer=pointer)


def test_new_sprite_is_centred_on_its_position():
    sprite = Sprite("default", 2, (80, 100))
    assert sprite.offset == Vector2(40, 50)
    assert sprite.position == Vector2(0, 0)
    assert sprite.frame == 0


def test_set_frame_accepts_up_to_max_frames():
    sprite = Sprite("default", 2, (10, 10))
    sprite.set_frame(2)
    assert sprite.frame == 2
    sprite.set_frame(3)
    assert sprite.frame == 2
    sprite.set_frame(-1)
    assert sprite.frame == 2


def test_plain_sprite_update_keeps_position():
    sprite = Sprite("default", 1, (10, 10))
    sprite.set_position((5, 6))
    sprite.update(1.0)
    assert sprite.position == Vector2(5, 6)


def test_moving_sprite_moves_by_velocity():
    sprite = MovingSprite("default", 1, (10, 10), (0, 0), (50, -20))
    sprite.set_position((100, 100))
    sprite.update(0.5)
    assert sprite.position == Vector2(125, 90)


def test_rotating_sprite_moves_and_spins():
    sprite = RotatingSprite("default", 2, (10, 10), (0, 0), (10, 0), 30)
    sprite.update(0.5)
    assert sprite.position == Vector2(5, 0)
    assert sprite.rotation == 15


def test_outside_checks_against_window():
    sprite = Sprite("default", 1, (10, 10))
    sprite.set_position((10, 10))
    assert not sprite.is_outside_of_window()
    sprite.set_position((-1, 10))
    assert sprite.is_outside_of_window()
    assert sprite.is_outside_of_window_side(ScreenSide.LEFT)
    assert not sprite.is_outside_of_window_side(ScreenSide.RIGHT)
    sprite.set_position((SCREEN_WIDTH + 1, SCREEN_HEIGHT + 1))
    assert sprite.is_outside_of_window_side(ScreenSide.RIGHT)
    assert sprite.is_outside_of_window_side(ScreenSide.BOTTOM)
    assert not sprite.is_outside_of_window_side(ScreenSide.TOP)


def test_draw_places_frame_around_position():
    surface = pygame.Surface((200, 200))
    surface.fill((255, 255, 255))
    sprite = Sprite("default", 1, (20, 20))
    sprite.set_position((100, 100))
    sprite.draw(surface)
    assert surface.get_at((100, 100))[:3] == (0, 0, 0)
    assert surface.get_at((0, 0))[:3] == (255, 255, 255)


def test_draw_with_size_scales():
    surface = pygame.Surface((200, 200))
    surface.fill((255, 255, 255))
    sprite = Sprite("default", 1, (20, 20))
    sprite.set_position((100, 100))
    sprite.draw(surface, (60, 60))
    assert surface.get_at((140, 140))[:3] == (0, 0, 0)
    assert surface.get_at((170, 170))[:3] == (255, 255, 255)


def test_button_click_calls_handler():
    calls = []
    pointer = _Pointer(PointerState((100, 100), released=True))
    button = _button(pointer, lambda: calls.append(1))
    button.update(0.016)
    assert calls == [1]
    assert button.was_clicked()
    assert button.frame == 1


def test_button_pressed_frame():
    pointer = _Pointer(PointerState((100, 100), down=True))
    button = _button(pointer)
    button.update(0.016)
    assert button.frame == 2
    assert not button.was_clicked()


def test_button_not_hovered():
    calls = []
    pointer = _Pointer(PointerState((10, 10), released=True))
    button = _button(pointer, lambda: calls.append(1))
    button.update(0.016)
    assert button.frame == 0
    assert calls == []


def test_disabled_button_ignores_clicks():
    calls = []
    pointer = _Pointer(PointerState((100, 100), down=True, released=True))
    button = _button(pointer, lambda: calls.append(1))
    button.disable()
    button.update(0.016)
    assert calls == []
    assert button.frame == 0
    button.enable()
    button.update(0.016)
    assert calls == [1]


def test_clicked_flag_resets_next_update():
    pointer = _Pointer(PointerState((100, 100), released=True))
    button = _button(pointer)
    button.update(0.016)
    pointer.state = PointerState((100, 100))
    button.update(0.016)
    assert not button.was_clicked()


def test_clicked_update_reports_release_anywhere():
    pointer = _Pointer(PointerState((0, 0), released=True))
    button = _button(pointer)
    assert button.clicked_update(0.016) is True
    pointer.state = PointerState((100, 100))
    assert button.clicked_update(0.016) is False


def test_text_button_centres_label_on_button():
    pointer = _Pointer(PointerState((0, 0)))
    button = TextButton(
        (300, 200), (600, 100), (0, 0), "Back", "default", DEFAULT_FONT_KEY, lambda: None, pointer
    )
    assert button.label.position == Vector2(300, 200)
    assert button.label.offset == measure_text(DEFAULT_FONT_KEY, "Back", 40, 2) / 2


def test_text_button_click():
    calls = []
    pointer = _Pointer(PointerState((300, 200), released=True))
    button = TextButton(
        (300, 200), (600, 100), (0, 0), "Join", "default", DEFAULT_FONT_KEY,
        lambda: calls.append("join"), pointer,
    )
    button.update(0.016)
    assert calls == ["join"]


def test_text_button_draws_label_over_button():
    surface = pygame.Surface((400, 300))
    surface.fill((255, 255, 255))
    pointer = _Pointer(PointerState((0, 0)))
    button = TextButton(
        (200, 150), (64, 64), (0, 0), "W", "default", DEFAULT_FONT_KEY, lambda: None, pointer
    )
    button.draw(surface)
    colours = {tuple(surface.get_at((x, y))[:3]) for x in range(170, 230) for y in range(120, 180)}
    assert (0, 0, 0) in colours
    assert len(colours) > 1