"""Articulatory voice synthesis with a glottal source and a waveguide vocal tract."""

__version__ = "0.1.0"