"""
Core numeric primitives, accumulators, and serialization contracts.

This module contains the foundational building blocks of fpd: the
fixed-point decimal engine and the structures built on top of it.
"""
