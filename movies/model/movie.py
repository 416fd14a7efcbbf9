from dataclasses import dataclass, field
from typing import List


@dataclass
class Movie:
    id: int
    title: str
    description: str
    release_date: str
    rating: int


@dataclass
class ActorName:
    name: str


@dataclass
class MovieView:
    id: int
    title: str
    description: str
    release_date: str
    rating: int
    actors: List[ActorName] = field(default_factory=list)

    @classmethod
    def from_movie(cls, movie: Movie, actors: List[ActorName]) -> "MovieView":
        return cls(
            id=movie.id,
            title=movie.title,
            description=movie.description,
            release_date=movie.release_date,
            rating=movie.rating,
            actors=actors,
        )
