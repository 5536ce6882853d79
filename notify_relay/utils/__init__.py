"""Utility modules shared by the relay and the orders service."""
