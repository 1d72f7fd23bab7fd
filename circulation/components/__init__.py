"""Engine components. Each one is a set of pure functions over frozen models."""
