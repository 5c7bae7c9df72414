"""Basic example of using the N-body simulator."""

from nbody_sim import Simulator, get_backend
from nbody_sim.physics.diagnostics import EnergyMonitor
from nbody_sim.presets import LinearChain

def main():
    """Run a small linear chain on a thread pool."""
    # Create the default line of particles
    system = LinearChain(n_particles=200).generate()
    monitor = EnergyMonitor()
    
    with get_backend("threads", workers=4) as backend:
        sim = Simulator(system, dt=0.01, backend=backend)
        
        print("Running simulation...")
        print(f"Initial energy: {sim.get_energy():e}")
        
        for step in range(1, 501):
            sim.step()
            if step % 100 == 0:
                energy = sim.get_energy()
                print(f"Step {step}: Time={sim.time:.2f}, Energy={energy:e}")
    
    print(f"Center-of-mass velocity: {monitor.center_of_mass_velocity(system)}")
    print(f"Final energy: {sim.get_energy():e}")
    print("Simulation complete!")

if __name__ == "__main__":
    main()
