"""Utility helpers shared across WaveKit."""
