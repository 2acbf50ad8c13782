"""Tests for the system-manifests command line tool."""
