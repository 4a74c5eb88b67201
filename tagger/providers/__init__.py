"""Concrete adapters for the interfaces in :mod:`tagger.interfaces`."""
