from models.base import Base
from models.movie import Movie
from models.night import MovieView, Night
from models.person import Person
from models.rating import Rating
from models.watchlist import Watchlist, WatchlistEntry

__all__ = ["Base", "Movie", "Person", "Night", "MovieView", "Rating", "Watchlist", "WatchlistEntry"]
