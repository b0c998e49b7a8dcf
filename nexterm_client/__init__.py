"""Client-side state for a multiplexing terminal: scrollback, fuzzy pickers, host manager, selection, settings, input and plugins."""

__version__ = "0.9.0"