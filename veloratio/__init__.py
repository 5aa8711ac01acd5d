"""
VeloRatio - Bicycle drivetrain speed, power and coaching advice calculator
"""

__version__ = "1.0.0"
