"""Physics models for simulated rotors, aerodynamic surfaces, underwater vehicles, wind and sensors."""

__version__ = "0.1.0"

__all__ = [
    "geomag",
    "liftdrag",
    "mathutil",
    "motor",
    "sonar",
    "uuv",
    "vision",
    "wind",
]