"""A small C compiler that lowers syntax trees to qproc and HyperCPU assembly."""

__version__ = "0.1.0"