from types import SimpleNamespace

import matplotlib.pyplot as plt
import pytest

from vanderpol_live import INITIAL_STATE, LivePhasePortrait
from vanderpol_rk4 import State
from vanderpol_stream import TrajectoryStream


@pytest.fixture
def view():
    stream = TrajectoryStream(INITIAL_STATE, mu=1.0, h=0.05, capacity=50)
    view = LivePhasePortrait(stream, speed=2)
    yield view
    plt.close(view.fig)


def click(ax, x, y):
    return SimpleNamespace(inaxes=ax, xdata=x, ydata=y)


def test_animate_advances_and_draws(view):
    view.animate(0)
    view.animate(1)

    assert len(view.stream) == 4
    xs, ys = view.trail.get_data()
    assert len(xs) == 4
    hx, hy = view.head.get_data()
    assert (hx[0], hy[0]) == tuple(view.stream.state)
    sx, _ = view.series.get_data()
    assert list(sx) == [46, 47, 48, 49]


def test_pause_stops_stepping(view):
    view.on_play_clicked(None)
    assert not view.playing
    assert view.play_btn.label.get_text() == "Play"

    view.animate(0)
    assert len(view.stream) == 0

    view.on_play_clicked(None)
    view.animate(1)
    assert len(view.stream) == 2


def test_click_in_phase_space_reseeds(view):
    view.animate(0)
    view.on_play_clicked(None)

    view.on_click(click(view.ax_phase, 1.5, -0.5))

    assert view.stream.state == State(1.5, -0.5)
    assert len(view.stream) == 0
    assert view.playing


def test_click_outside_phase_space_is_ignored(view):
    view.animate(0)
    state = view.stream.state

    view.on_click(click(view.ax_series, 1.5, -0.5))
    view.on_click(click(None, None, None))

    assert view.stream.state == state
    assert len(view.stream) == 2


def test_mu_slider_sets_parameter_and_clears_trail(view):
    view.animate(0)
    view.slider_mu.set_val(2.5)

    assert view.stream.mu == pytest.approx(2.5)
    assert len(view.stream) == 0


def test_speed_slider(view):
    view.slider_speed.set_val(5)
    view.animate(0)
    assert view.speed == 5
    assert len(view.stream) == 5


def test_reset_returns_to_initial_state(view):
    view.animate(0)
    view.on_reset_clicked(None)
    assert view.stream.state == State(*INITIAL_STATE)
    assert len(view.stream) == 0


def test_start_creates_animation(view):
    anim = view.start()
    assert anim is view.anim


def test_dark_style_does_not_leak_into_other_figures():
    facecolor = plt.rcParams["axes.facecolor"]
    view = LivePhasePortrait(TrajectoryStream(INITIAL_STATE))
    try:
        assert plt.rcParams["axes.facecolor"] == facecolor
    finally:
        plt.close(view.fig)
