"""Entry-effect handlers for each group of phases."""
