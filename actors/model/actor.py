from dataclasses import dataclass, field
from typing import List


@dataclass
class Actor:
    id: int
    name: str
    gender: str
    birthday: str


@dataclass
class MovieTitle:
    title: str


@dataclass
class ActorView:
    id: int
    name: str
    gender: str
    birthday: str
    movies: List[MovieTitle] = field(default_factory=list)

    @classmethod
    def from_actor(cls, actor: Actor, movies: List[MovieTitle]) -> "ActorView":
        return cls(
            id=actor.id,
            name=actor.name,
            gender=actor.gender,
            birthday=actor.birthday,
            movies=movies,
        )
