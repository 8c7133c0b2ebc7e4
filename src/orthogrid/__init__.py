"""Animated grids of orthographic cubes driven by pluggable behaviours."""
