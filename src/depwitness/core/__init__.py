"""Dependency integrity verification engine.

The engine turns a resolved-artifact listing into an inventory of
``DependencyKey -> sha256`` digests, parses and writes trusted manifests,
and verifies one against the other. Nothing in this package touches the
network or reads ambient configuration; every input is passed in.
"""
