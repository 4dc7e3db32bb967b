"""
Simulation session, configuration and state history.
"""
