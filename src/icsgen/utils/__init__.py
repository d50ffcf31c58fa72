"""Utility helpers for the ICS generator."""
