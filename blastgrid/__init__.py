"""Grid-based bomb-laying arcade game with a windowless simulation core."""

__version__ = "0.1.0"