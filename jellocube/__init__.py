"""Mass-spring jello cube simulation: world files, forces, integrators and scene geometry."""

__version__ = "0.1.0"