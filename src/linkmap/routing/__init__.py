"""Routing — bidirectional link patterns.

Controllers are registered during setup; matching and link generation
read an immutable snapshot of the registry at request time.
"""
