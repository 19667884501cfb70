"""Simulation helpers."""
from .montecarlo import random_walk, simulate_ols_data

__all__ = ["random_walk", "simulate_ols_data"]
