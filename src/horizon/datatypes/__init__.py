"""Data structures shared across Horizon."""
