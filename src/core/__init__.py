"""
Core numeric kernel for feed-forward neural-network primitives.

Contains scalar activations, the numerical-differentiation harness,
and the Matrix with its elementwise transform engine.
"""
