import matplotlib.pyplot as plt
from typing import Dict, List

from controller.auto_door import AutoDoorController
from simulator.physics.world import PhysicsWorld

# Positions may sit on an envelope edge up to float rounding
ENVELOPE_EPSILON = 1e-9


class DoorTrace:
    """
    Records every door's planar position and decided action once per world update.

    Must be attached after the controllers so it samples the clamped pose.
    """
    def __init__(self, world: PhysicsWorld):
        self.world = world
        self.controllers: Dict[str, AutoDoorController] = {}
        self.samples: Dict[str, List[dict]] = {}
        self.world.connect_update_end(self._sample)

    def register(self, controller: AutoDoorController):
        self.controllers[controller.name] = controller
        self.samples[controller.name] = []

    def _sample(self):
        now = self.world.env.now
        for name, controller in self.controllers.items():
            pose = controller.door_link.get_world_pose()
            self.samples[name].append({
                'time': now,
                'x': pose.x,
                'y': pose.y,
                'action': controller.last_action.value if controller.last_action else None,
            })

    def envelope_violations(self) -> List[dict]:
        """Samples whose position lies outside the door's travel envelope"""
        violations = []
        for name, controller in self.controllers.items():
            env = controller.envelope
            for sample in self.samples[name]:
                x, y = sample['x'], sample['y']
                if (x < env.min_x - ENVELOPE_EPSILON or x > env.max_x + ENVELOPE_EPSILON or
                        y < env.min_y - ENVELOPE_EPSILON or y > env.max_y + ENVELOPE_EPSILON):
                    violations.append({'door': name, **sample})
        return violations

    def open_ratio(self, name: str) -> float:
        """Fraction of samples in which the given door was commanded open"""
        samples = self.samples.get(name, [])
        if not samples:
            return 0.0
        return sum(1 for s in samples if s['action'] == 'OPEN') / len(samples)

    def print_summary(self):
        print("\n" + "=" * 60)
        print("   DOOR TRACE SUMMARY")
        print("=" * 60)
        for name, controller in self.controllers.items():
            samples = self.samples[name]
            final = samples[-1] if samples else None
            final_text = f"final ({final['x']:.4f}, {final['y']:.4f})" if final else "no samples"
            print(f"  {name}: {len(samples)} samples, open {self.open_ratio(name) * 100:.1f}%, {final_text}")
        violations = self.envelope_violations()
        if violations:
            print(f"  WARNING: {len(violations)} samples outside the travel envelope")
        else:
            print("  All samples inside their travel envelopes")
        print("=" * 60)

    def plot(self, output_filename: str = "door_trace.png", show: bool = False):
        """Plot each door's X and Y offset from its closed position over time"""
        fig, (ax_x, ax_y) = plt.subplots(2, 1, figsize=(14, 8), sharex=True)

        for name, controller in self.controllers.items():
            samples = self.samples[name]
            if not samples:
                continue
            times = [s['time'] for s in samples]
            closed_x = controller.envelope.max_x if controller.velocities.close_vel > 0 else controller.envelope.min_x
            closed_y = controller.envelope.max_y if controller.velocities.close_vel > 0 else controller.envelope.min_y
            ax_x.plot(times, [s['x'] - closed_x for s in samples], label=name, linewidth=1.5)
            ax_y.plot(times, [s['y'] - closed_y for s in samples], label=name, linewidth=1.5)

        ax_x.set_title("Door Slide Trace")
        ax_x.set_ylabel("X offset (m)")
        ax_y.set_ylabel("Y offset (m)")
        ax_y.set_xlabel("Time (s)")
        for ax in (ax_x, ax_y):
            ax.grid(True, which='both', linestyle='--', alpha=0.7)
            ax.legend(loc='upper right', fontsize=9)

        plt.tight_layout()
        plt.savefig(output_filename, dpi=150, bbox_inches='tight')
        print(f"Door trace saved to {output_filename}")
        if show:
            plt.show()
        plt.close(fig)
