"""Job builder for W.I.S.E. fire growth simulations.

Compiles a flat simulation setup file and command line export flags into a
validated job description that can be handed to the simulation engine.
"""
