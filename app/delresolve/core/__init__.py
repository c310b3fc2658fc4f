"""Core infrastructure: paths, configuration, state and theming."""
