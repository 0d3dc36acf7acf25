"""Tests for helm2bundle."""
