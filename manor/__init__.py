"""
MANOR - Luxury Residential Program Advisor

Validates residential floor-plan programs against adjacency rules,
scores them per functional module, recommends personalized adjacencies,
and scores candidate sites for a validated program.
"""

__version__ = "1.0.0"
