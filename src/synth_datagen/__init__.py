"""
Synthetic Data Generator

A configurable synthetic data generator supporting:
- Delimited records from declarative field specifications
- Named presets for common record shapes
- Random text tokens and email addresses from character pools
- Synchronous or batched generation with progress and cancellation
"""

__version__ = "1.0.0"
__author__ = "Synth DataGen"
