"""Tests for pokesim."""
