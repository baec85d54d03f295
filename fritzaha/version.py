"""Version of python-fritzaha."""

__version__ = "0.1.0"
