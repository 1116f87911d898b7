"""
Live phase portrait of the Van der Pol oscillator.

Click in the phase-space panel to restart from that point, drag the mu
slider to change the damping and the speed slider to take more steps per
frame.
"""

import logging
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.widgets import Slider, Button

from vanderpol_stream import TrajectoryStream

logger = logging.getLogger(__name__)

INITIAL_STATE = (0.1, 0.1)
PHASE_LIMIT = 400 / 2 / 60  # half canvas width over pixels per unit
MU_RANGE = (0.0, 5.0)
SPEED_RANGE = (1, 10)
FRAME_INTERVAL_MS = 16


class LivePhasePortrait:
    """
    Matplotlib front end for a TrajectoryStream.

    Args:
        stream: Stream to drive; a default one is created when omitted
        speed: Integration steps per animation frame
    """

    def __init__(self, stream: Optional[TrajectoryStream] = None, speed: int = 1):
        self.stream = stream if stream is not None else TrajectoryStream(INITIAL_STATE)
        self.speed = int(speed)
        self.playing = True

        with plt.style.context('dark_background'):
            self.fig = plt.figure(figsize=(10, 8))
            self.fig.suptitle('Van der Pol Oscillator', fontsize=14, fontweight='bold')

            self.ax_phase = self.fig.add_axes([0.08, 0.40, 0.50, 0.52])
            self.ax_series = self.fig.add_axes([0.08, 0.18, 0.84, 0.16])

            self.ax_phase.set_xlim(-PHASE_LIMIT, PHASE_LIMIT)
            self.ax_phase.set_ylim(-PHASE_LIMIT, PHASE_LIMIT)
            self.ax_phase.set_aspect('equal')
            self.ax_phase.axhline(0, color='#94a3b8', lw=1)
            self.ax_phase.axvline(0, color='#94a3b8', lw=1)
            self.ax_phase.grid(True, color='#334155')
            self.ax_phase.set_title('Phase Space (y vs x) - click to set state', fontsize=11)

            self.ax_series.set_xlim(0, self.stream.capacity)
            self.ax_series.set_ylim(-PHASE_LIMIT, PHASE_LIMIT)
            self.ax_series.axhline(0, color='#475569', lw=1)
            self.ax_series.set_title('Time Series (x vs t)', fontsize=11)
            self.ax_series.set_xticks([])

            self.trail, = self.ax_phase.plot([], [], color='#38bdf8', lw=2)
            self.head, = self.ax_phase.plot([], [], 'o', color='#f472b6', ms=8)
            self.series, = self.ax_series.plot([], [], color='#38bdf8', lw=1.5)

            slider_ax_mu = self.fig.add_axes([0.68, 0.80, 0.24, 0.03])
            slider_ax_speed = self.fig.add_axes([0.68, 0.72, 0.24, 0.03])
            self.slider_mu = Slider(slider_ax_mu, 'mu', *MU_RANGE, valinit=self.stream.mu, valstep=0.1)
            self.slider_speed = Slider(slider_ax_speed, 'speed', *SPEED_RANGE, valinit=self.speed, valstep=1)
            self.slider_mu.on_changed(self.on_mu_changed)
            self.slider_speed.on_changed(self.on_speed_changed)

            play_ax = self.fig.add_axes([0.68, 0.60, 0.11, 0.05])
            reset_ax = self.fig.add_axes([0.81, 0.60, 0.11, 0.05])
            self.play_btn = Button(play_ax, 'Pause', color='#2a2a4a', hovercolor='#3a3a5a')
            self.reset_btn = Button(reset_ax, 'Reset', color='#2a2a4a', hovercolor='#3a3a5a')
            self.play_btn.on_clicked(self.on_play_clicked)
            self.reset_btn.on_clicked(self.on_reset_clicked)

            self.fig.canvas.mpl_connect('button_press_event', self.on_click)

        self.anim = None

    # === Input handlers ===

    def on_click(self, event):
        if event.inaxes is not self.ax_phase or event.xdata is None or event.ydata is None:
            return
        self.stream.reseed((event.xdata, event.ydata), clear_history=True)
        self.set_playing(True)
        self.draw()

    def on_mu_changed(self, value):
        self.stream.set_parameter(value)
        self.stream.clear_history()

    def on_speed_changed(self, value):
        self.speed = int(value)

    def on_play_clicked(self, event):
        self.set_playing(not self.playing)

    def on_reset_clicked(self, event):
        self.stream.reseed(INITIAL_STATE, clear_history=True)
        self.set_playing(True)
        self.draw()

    def set_playing(self, playing: bool):
        self.playing = playing
        self.play_btn.label.set_text('Pause' if playing else 'Play')

    # === Animation ===

    def draw(self):
        samples = self.stream.history_array()
        state = self.stream.state

        self.trail.set_data(samples[:, 1], samples[:, 2])
        self.head.set_data([state.x], [state.y])

        # Newest sample sits at the right edge
        n = len(samples)
        offset = self.stream.capacity - n
        self.series.set_data(np.arange(offset, offset + n), samples[:, 1])
        return self.trail, self.head, self.series

    def animate(self, frame):
        if self.playing:
            self.stream.advance(self.speed)
        return self.draw()

    def start(self):
        self.anim = FuncAnimation(
            self.fig, self.animate, interval=FRAME_INTERVAL_MS,
            blit=False, cache_frame_data=False
        )
        return self.anim


def run_live(mu: float = 1.0, speed: int = 1):
    stream = TrajectoryStream(INITIAL_STATE, mu=mu)
    view = LivePhasePortrait(stream, speed=speed)
    view.start()
    logger.info(f"Starting live view with mu={mu}, h={stream.h}, capacity={stream.capacity}")
    plt.show()
    return view


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    run_live()


if __name__ == '__main__':
    main()
