"""Core configuration, logging, units and spatial math."""
