"""
Core package for FleetFaults Bot

Bot wiring lives in core.bot, the error taxonomy in core.exceptions.
"""
