"""Game engine core without graphics: actors, resources, settings, input, physics and collisions."""

__version__ = "0.1.0"