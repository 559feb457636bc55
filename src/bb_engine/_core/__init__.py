"""Core season engine: state, randomness, resolution and phase handlers."""
