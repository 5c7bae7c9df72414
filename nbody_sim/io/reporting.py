"""Console output of energies, particle snapshots and timings."""

from typing import TextIO
import sys
from nbody_sim.physics.diagnostics import EnergyReport
from nbody_sim.physics.nbody import ParticleSystem


def format_energy(step: int, report: EnergyReport) -> str:
    """Format one energy line. Step 0 is printed without a step label."""
    values = f"PE = {report.potential:e}, KE = {report.kinetic:e}, Total Energy = {report.total:e}"
    if step == 0:
        return "   " + values
    return f" istep = {step}, " + values


def format_state(time: float, system: ParticleSystem) -> str:
    """Format a snapshot: the time, then index, position and velocity per particle."""
    lines = [f"{time:.2f}"]
    positions = system.positions
    velocities = system.velocities
    for part in range(system.n_particles):
        lines.append(
            f"{part:3d} {positions[part, 0]:10.3e} "
            f"  {positions[part, 1]:10.3e} "
            f"  {velocities[part, 0]:10.3e} "
            f"  {velocities[part, 1]:10.3e}"
        )
    lines.append("")
    return "\n".join(lines)


def format_elapsed(seconds: float) -> str:
    return f"Elapsed time = {seconds:e} seconds"


class ConsoleReporter:
    """Prints simulator diagnostics to a text stream.
    
    ``on_energy`` and ``on_output`` match the simulator's energy and output
    callback signatures.
    """
    
    def __init__(self, stream: TextIO = None, report_state: bool = False):
        """Initialize reporter.
        
        Args:
            stream: Output stream (default: sys.stdout at call time)
            report_state: Whether to print particle snapshots at output steps
        """
        self._stream = stream
        self.report_state = report_state
    
    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout
    
    def on_energy(self, sim, step: int, report: EnergyReport):
        print(format_energy(step, report), file=self.stream)
    
    def on_output(self, sim, step: int):
        if self.report_state:
            print(format_state(step * sim.dt, sim.system), file=self.stream)
    
    def on_finish(self, elapsed_seconds: float):
        print(format_elapsed(elapsed_seconds), file=self.stream)
