"""IBM JRE buildpack component — select, stage and tune a Java runtime."""

__version__ = "0.1.0"
