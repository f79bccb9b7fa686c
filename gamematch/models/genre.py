from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from gamematch.extension.extensions import db


class Genre(db.Model):
    __tablename__ = 'genres'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), unique=True, nullable=False)

    games = relationship('Game', back_populates='genre')

    def to_dict(self):
        return {'id': self.id, 'name': self.name}

    def __repr__(self):
        return f"<Genre {self.name}>"
