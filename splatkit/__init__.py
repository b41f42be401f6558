"""Building blocks for Gaussian splat tooling: a scaled Adam optimizer, weighted sampling,
a virtual filesystem with data sources, code writing, shader-name helpers and byte formatting."""

__version__ = "0.2.0"