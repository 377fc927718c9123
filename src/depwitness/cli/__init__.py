"""DepWitness command-line interface."""
