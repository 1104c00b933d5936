"""
evs_lib - Property compiler for Elastic Virtual Switch (EVS) management

This package validates EVS, IPnet and VPort property values, normalizes the
legacy and structured input formats, and compiles them into argument
sequences for evsadm.
"""

__version__ = "1.0.0"
