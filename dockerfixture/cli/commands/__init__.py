"""CLI commands for dockerfixture."""
