"""Test suite for the catalog JSON-LD service."""
