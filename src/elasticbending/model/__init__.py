"""
The MODEL layer contains pure data structures: geometry, boundary inputs,
diagnostics and results. It does not solve anything itself.
"""
