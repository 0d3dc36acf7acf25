"""Tests for the helm2bundle command line tool."""
