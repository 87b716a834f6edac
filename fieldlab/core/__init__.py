"""Core simulation loops for fieldlab.

Modules:
- particles: particle field under a chaotic force, drawn with fading trails
- growth: disks that grow until they touch an edge or a neighbour
- interference: two-source wave interference as a grayscale field
- loop: explicit frame loop with an injected frame wait
"""
