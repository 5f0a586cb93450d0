"""Data models for Lock-in Beat."""
