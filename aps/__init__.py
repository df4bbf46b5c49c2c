"""
aps - Short aliases for APT

A thin dispatcher over apt and apt-mark, featuring:
- Short aliases (in, rm, up, se, ...)
- Automatic package list refresh before installs and upgrades
- sudo only where the operation needs it
- Everything else passed to apt unchanged
"""

__version__ = "0.1.0"
__author__ = "aps contributors"
