"""Artifact Locator: resolve Nexus artifact coordinates, credentials and download URLs."""
