"""SPICE units, sources and waveforms, control statements, parsers and result plotting."""

__version__ = "0.1.0"