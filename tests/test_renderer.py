import pytest

from brewterm.renderer import NilRenderer, Renderer


def test_nil_renderer_alt_screen_always_false():
    r = NilRenderer()
    r.start()
    r.stop()
    r.kill()
    r.write("a")
    r.repaint()
    r.enter_alt_screen()
    assert r.alt_screen() is False
    r.exit_alt_screen()
    r.clear_screen()
    r.show_cursor()
    r.hide_cursor()
    r.enable_mouse_cell_motion()
    r.disable_mouse_cell_motion()
    r.enable_mouse_all_motion()
    r.disable_mouse_all_motion()
    assert r.alt_screen() is False


def test_nil_renderer_operations_return_nothing():
    r = NilRenderer()
    results = [
        r.start(),
        r.write("view"),
        r.repaint(),
        r.clear_screen(),
        r.show_cursor(),
        r.hide_cursor(),
        r.stop(),
        r.kill(),
    ]
    assert results == [None] * 8


def test_renderer_is_abstract():
    with pytest.raises(TypeError):
        Renderer()