"""Graph primitives and helpers.

This package provides the adjacency-matrix graph type `MatrixGraph` and
helper modules for compact keys (`key`), NetworkX conversion (`convert`) and
random edge generation (`generate`).
"""
