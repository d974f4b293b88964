"""Core infrastructure for hdfsprune: paths, configuration and theming."""
