"""Demonstrate classic inheritance idioms of prototype-based object models."""

# Please keep in sync with the version in setup.py
__version__ = "0.1.0"
__author__ = "Marko Ristin, Nico Braunisch, Robert Lehmann"
__license__ = "License :: OSI Approved :: MIT License"
__status__ = "Alpha"
