"""Front-ends: terminal play loop and REST API."""
