"""Command line tool for packaging a helm chart as a service bundle."""
