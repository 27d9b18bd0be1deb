"""
Configuration package for FleetFaults Bot
"""
