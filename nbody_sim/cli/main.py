"""CLI main entry point."""

import argparse
import logging
import sys
from nbody_sim.backends.factory import get_backend, list_available_backends
from nbody_sim.errors import ConfigError, IngestError
from nbody_sim.io.ingest import PROMPT, load_initial_conditions, read_initial_conditions
from nbody_sim.io.reporting import ConsoleReporter
from nbody_sim.physics.diagnostics import EnergyMonitor
from nbody_sim.physics.force_calculator import ForceField
from nbody_sim.physics.integrators.euler import EulerIntegrator
from nbody_sim.physics.simulator import Simulator
from nbody_sim.presets import LinearChain
from nbody_sim.utils.config import SimulationConfig, load_config, normalize_init_mode

logger = logging.getLogger("nbody_sim")

# CLI flag destination -> SimulationConfig field
_OVERRIDES = {
    'particles': 'n_particles',
    'steps': 'n_steps',
    'dt': 'dt',
    'output_freq': 'output_freq',
    'threads': 'workers',
    'backend': 'backend',
    'init': 'init_mode',
    'input': 'input_path',
    'plot': 'plot_path',
}


def build_config(args) -> SimulationConfig:
    """Merge the optional config file with command-line overrides."""
    config = load_config(args.config) if args.config else SimulationConfig()
    for dest, field_name in _OVERRIDES.items():
        value = getattr(args, dest)
        if value is not None:
            setattr(config, field_name, value)
    if args.no_energy:
        config.report_energy = False
    if args.state:
        config.report_state = True
    config.init_mode = normalize_init_mode(config.init_mode)
    return config.validate()


def load_system(config: SimulationConfig, stdin=None):
    """Build the initial particle system for the configured mode."""
    if config.init_mode == "generate":
        return LinearChain(config.n_particles).generate()

    if config.input_path is not None:
        return load_initial_conditions(config.input_path, config.n_particles)

    stdin = stdin if stdin is not None else sys.stdin
    if stdin.isatty():
        print(PROMPT, end="", file=sys.stderr)
    return read_initial_conditions(stdin, config.n_particles)


def run_simulation(config: SimulationConfig, stdin=None, stdout=None):
    """Run a simulation.

    Returns:
        RunResult of the step loop
    """
    system = load_system(config, stdin)
    reporter = ConsoleReporter(stdout, report_state=config.report_state)

    renderer = None
    if config.plot_path:
        from nbody_sim.render.renderer_2d import Renderer2D
        renderer = Renderer2D(show_trails=True)

    with get_backend(config.backend, workers=config.workers) as backend:
        sim = Simulator(
            system,
            config.dt,
            backend=backend,
            integrator=EulerIntegrator(),
            force_field=ForceField(G=config.G),
            energy_monitor=EnergyMonitor(G=config.G),
        )
        if config.report_energy:
            sim.on_energy_callback = reporter.on_energy

        def on_output(sim, step):
            reporter.on_output(sim, step)
            if renderer is not None:
                renderer.render(sim.system.positions, sim.system.velocities, sim.system.masses)

        sim.on_output_callback = on_output

        result = sim.run(config.n_steps, output_freq=config.output_freq,
                         compute_energy=config.report_energy)

    reporter.on_finish(result.elapsed_seconds)

    if renderer is not None:
        renderer.save(config.plot_path)
        renderer.close()
        logger.info("Trajectory plot saved to %s", config.plot_path)

    return result


def main(argv=None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="2D direct-summation N-body simulator (explicit Euler)"
    )

    # Simulation parameters
    parser.add_argument('--config', type=str, default=None,
                        help='Load parameters from a .json/.yaml config file (flags override it)')
    parser.add_argument('--particles', type=int, default=None,
                        help='Number of particles (default: 100)')
    parser.add_argument('--steps', type=int, default=None,
                        help='Number of timesteps (default: 1000)')
    parser.add_argument('--dt', type=float, default=None,
                        help='Size of timestep in seconds (default: 0.01)')
    parser.add_argument('--output-freq', type=int, default=None,
                        help='Print diagnostics every N steps (default: 100)')

    # Execution
    parser.add_argument('--threads', type=int, default=None,
                        help='Number of worker threads (default: 1)')
    parser.add_argument('--backend', type=str, default=None,
                        choices=list_available_backends(),
                        help='Execution backend (default: threads if --threads > 1, else serial)')

    # Initial conditions
    parser.add_argument('--init', type=str, default=None,
                        choices=['generate', 'ingest', 'g', 'i'],
                        help="'generate' (g): particles on a line; 'ingest' (i): read from --input or stdin")
    parser.add_argument('--input', type=str, default=None,
                        help='Initial conditions file for ingest mode (default: stdin)')

    # Output
    parser.add_argument('--no-energy', action='store_true',
                        help='Do not compute or print energies')
    parser.add_argument('--state', action='store_true',
                        help='Print positions and velocities at every output step')
    parser.add_argument('--plot', type=str, default=None,
                        help='Save a trajectory plot of the output steps to this image file')

    # Logging
    parser.add_argument('--verbose', action='store_true',
                        help='Log progress messages')
    parser.add_argument('--debug', action='store_true',
                        help='Log debug messages')

    # Info
    parser.add_argument('--list-backends', action='store_true',
                        help='List available backends and exit')

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.debug else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    if args.list_backends:
        print("Available backends:")
        for backend in list_available_backends():
            print(f"  - {backend}")
        return 0

    try:
        config = build_config(args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        run_simulation(config)
    except IngestError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except MemoryError:
        print(f"Error: not enough memory for {config.n_particles} particles", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
