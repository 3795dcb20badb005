"""
Mine Cart Simulator

Core modules:
- models: directions, turn choices, carts and their turning rules
- track: the read-only track grid and layout parsing
- engine: one tick of movement, ordering and collision detection
- simulation / trace: tick loops built on the engine (no behavior changes)
"""
