from __future__ import annotations

from rexp.core.viewport import Viewport


def _assert_window_holds(viewport: Viewport, selected: int, total: int) -> None:
    if total < viewport.size:
        assert viewport.start == 0
    else:
        assert viewport.start <= selected < viewport.start + viewport.size
        assert viewport.start + viewport.size <= max(total, viewport.size)


def test_moving_past_bottom_scrolls_minimally() -> None:
    viewport = Viewport(start=0, size=5)

    viewport.update(5, 20)

    assert viewport.start == 1


def test_moving_above_top_snaps_start_to_selection() -> None:
    viewport = Viewport(start=10, size=5)

    viewport.update(7, 20)

    assert viewport.start == 7


def test_selection_inside_window_does_not_scroll() -> None:
    viewport = Viewport(start=4, size=5)

    viewport.update(6, 20)

    assert viewport.start == 4


def test_invariant_holds_for_every_selection() -> None:
    for total in (1, 3, 5, 12):
        viewport = Viewport(size=5)
        for selected in [*range(total), *reversed(range(total))]:
            viewport.update(selected, total)
            _assert_window_holds(viewport, selected, total)


def test_short_listing_pins_start_to_zero() -> None:
    viewport = Viewport(start=6, size=10)

    viewport.update(2, 4)

    assert viewport.start == 0


def test_resize_recomputes_size_and_keeps_selection_visible() -> None:
    viewport = Viewport(start=0, size=20)

    viewport.resize(4, 10, 30)

    assert viewport.size == 4
    assert viewport.start == 7
    _assert_window_holds(viewport, 10, 30)


def test_resize_never_drops_below_one_row() -> None:
    viewport = Viewport()

    viewport.resize(0, 0, 3)

    assert viewport.size == 1


def test_scroll_moves_start_within_bounds() -> None:
    viewport = Viewport(start=0, size=5)

    viewport.scroll_up()
    assert viewport.start == 0

    for _ in range(10):
        viewport.scroll_down(8)
    assert viewport.start == 3


def test_clamp_selection_after_scroll() -> None:
    viewport = Viewport(start=0, size=5)
    viewport.scroll_down(20)
    viewport.scroll_down(20)

    assert viewport.clamp_selection(0, 20) == 2
    assert viewport.clamp_selection(4, 20) == 4
    assert viewport.clamp_selection(15, 20) == 6
    assert viewport.clamp_selection(3, 0) == 0


def test_reset_and_visible_range() -> None:
    viewport = Viewport(start=5, size=4)

    assert viewport.visible_range(7) == range(5, 7)
    viewport.reset()
    assert viewport.visible_range(7) == range(0, 4)
