"""Desktop simulator for KRUSHKA."""
