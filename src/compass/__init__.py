"""
Compass heading estimation.

Fuses accelerometer and magnetometer samples into a smoothed compass heading,
a rotation angle for a heading indicator and a human-readable bearing.
"""

__version__ = '0.1.0'
