"""Test package for roster_engine."""
