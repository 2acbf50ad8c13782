"""Command line tool for listing resources in a system manifests repository."""
