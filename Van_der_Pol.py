import argparse
import logging
import sys

import matplotlib.pyplot as plt

from vanderpol_config import ConfigError, VdpConfig, load_config
from vanderpol_rk4 import integrate, integrate_trajectory

logger = logging.getLogger(__name__)


def plot_trajectory(config: VdpConfig):
    """Plot x(t), y(t) and the phase portrait for a configured run."""
    t, states = integrate_trajectory(config.v0, config.mu, config.t_end, h=config.h)
    x = states[:, 0]
    y = states[:, 1]

    fig, (ax_t, ax_phase) = plt.subplots(1, 2, figsize=(12, 5))

    ax_t.plot(t, x, label='x(t)')
    ax_t.plot(t, y, label='y(t)')
    ax_t.set_title(f'Van der Pol Oscillator (mu = {config.mu})')
    ax_t.set_xlabel('Time')
    ax_t.set_ylabel('State')
    ax_t.legend()
    ax_t.grid(True)

    ax_phase.plot(x, y)
    ax_phase.plot(x[0], y[0], 'o', label='start')
    ax_phase.set_title('Phase Space (y vs x)')
    ax_phase.set_xlabel('x')
    ax_phase.set_ylabel('y')
    ax_phase.legend()
    ax_phase.grid(True)

    plt.tight_layout()
    return fig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Integrate the Van der Pol oscillator with RK4 up to a fixed end time'
    )
    parser.add_argument('config_path', help='Path to the configuration file (JSON or YAML)')
    parser.add_argument('--plot', action='store_true', help='Plot the trajectory after integrating')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_config(args.config_path)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    print("Configuration loaded successfully:")
    for key, value in config.to_dict().items():
        print(f"  {key}: {value}")

    vend = integrate(config.v0, config.mu, config.t_end, h=config.h)
    x, y = vend
    if not vend.is_finite():
        logger.warning(f"Integration diverged: final state is {vend}")
    print(f"X value: {x}; Y value: {y}")

    if args.plot:
        plot_trajectory(config)
        plt.show()

    return 0


if __name__ == '__main__':
    sys.exit(main())
