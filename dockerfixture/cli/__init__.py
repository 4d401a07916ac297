"""CLI for dockerfixture."""
