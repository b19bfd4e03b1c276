"""Tests for the agent-manifests command line tool."""
