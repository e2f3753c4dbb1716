"""
Numerical core: elliptic integrals, shape-parameter searches, curve sampling
and fitting, and the bending force.
"""
