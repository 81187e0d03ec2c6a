"""Core filtering, formatting and rendering of decoded events."""
