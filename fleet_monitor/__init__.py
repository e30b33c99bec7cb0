"""Fleet Monitor: telemetry aggregation for quantum-computing backend fleets."""

__version__ = "1.0.0"
