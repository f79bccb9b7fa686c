from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from gamematch.extension.extensions import db
from .game import game_tags


class Tag(db.Model):
    __tablename__ = 'tags'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), unique=True, nullable=False)

    games = relationship('Game', secondary=game_tags, back_populates='tags')

    def to_dict(self):
        return {'id': self.id, 'name': self.name}

    def __repr__(self):
        return f"<Tag {self.name}>"
