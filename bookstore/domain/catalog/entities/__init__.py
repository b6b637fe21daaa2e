from .author import Author
from .book import Book
from .genre import Genre

__all__ = ["Author", "Book", "Genre"]
