"""
Ride Analysis

Computational core for cycling ride analysis: GPX parsing, ride metrics,
calorie estimation, weather enrichment and terrain classification.
"""

__version__ = "0.1.0"
