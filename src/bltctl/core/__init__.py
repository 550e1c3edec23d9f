"""Core runtime primitives shared by every bltctl layer."""
