"""Example of saving a trajectory plot."""

from nbody_sim import Simulator
from nbody_sim.presets import LinearChain
from nbody_sim.render import Renderer2D

def main():
    """Plot the first few seconds of a short chain."""
    system = LinearChain(n_particles=12, gap=1.0e4).generate()
    sim = Simulator(system, dt=0.05)
    renderer = Renderer2D(show_trails=True)
    
    sim.on_output_callback = lambda s, step: renderer.render(
        s.system.positions, s.system.velocities, s.system.masses
    )
    sim.run(400, output_freq=20, compute_energy=False)
    
    renderer.save("linear_chain.png")
    renderer.close()
    print("Saved linear_chain.png")

if __name__ == "__main__":
    main()
