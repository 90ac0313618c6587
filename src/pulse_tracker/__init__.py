"""
Pulse Tracker - Personal health and workout tracking from the command line.

Records BMI measurements, appointments, menstrual-cycle periods, runs and gym
sessions, and persists them to a single local text file guarded by a SHA-256
integrity hash.
"""

__version__ = "0.1.0"
