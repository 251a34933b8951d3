"""Random maze generation, maze search, a search race and a Tkinter maze game."""

__version__ = "0.1.0"