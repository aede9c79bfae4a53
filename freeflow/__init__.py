"""FreeFlow Source Package.

Dopamine-detox dive trainer: a timed session of fake notifications
whose spawn rate decays as the dive goes deeper.

Layers:
    - core: Configuration, logging, exceptions, host timers
    - engine: Spawn scheduling, depth, budget, tiers, sessions
    - content: Generated content (completion report)
    - gui: User interface
"""

__version__ = "0.1.0"
