"""Engine package - Dive logic with no UI dependencies.

Modules:
    - models: Enums and dataclasses shared across the engine
    - spawn: Decay curve and spawn patterns
    - scheduler: IDLE/ARMED spawn loop on a host timer
    - depth: Time-driven depth with tap penalties
    - budget: Tolerated-tap counter
    - tiers: Completion classification
    - variants: Named constant sets
    - session: DiveSession tying it all together
"""
