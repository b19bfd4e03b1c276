"""Command line tool for generating agent installer manifests."""
