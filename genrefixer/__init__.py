"""
genre-fixer: tags music files with Last.FM folksonomy tags and one canonical
genre per artist.
"""

__version__ = "1.0.0"
