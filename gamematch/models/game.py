from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from gamematch.extension.extensions import db
from datetime import datetime


game_tags = Table(
    'game_tags',
    db.Model.metadata,
    Column('game_id', Integer, ForeignKey('games.id', ondelete='CASCADE'), primary_key=True),
    Column('tag_id', Integer, ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
)


class Game(db.Model):
    __tablename__ = 'games'

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False, index=True)
    release_year = Column(Integer, nullable=True)
    genre_id = Column(Integer, ForeignKey('genres.id', ondelete='RESTRICT'), nullable=False, index=True)
    platform_id = Column(Integer, ForeignKey('platforms.id', ondelete='RESTRICT'), nullable=False)
    image_url = Column(String(500))
    cloudinary_public_id = Column(String(255))
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    genre = relationship('Genre', back_populates='games')
    platform = relationship('Platform', back_populates='games')
    tags = relationship('Tag', secondary=game_tags, back_populates='games', order_by='Tag.name')
    requirements = relationship(
        'RequirementSet',
        back_populates='game',
        cascade='all, delete-orphan',
        order_by='RequirementSet.id'
    )

    def to_dict(self, include_requirements=False):
        """Serialize Game model to dictionary"""
        data = {
            'id': self.id,
            'title': self.title,
            'releaseYear': self.release_year,
            'genreId': self.genre_id,
            'genre': self.genre.to_dict() if self.genre else None,
            'platformId': self.platform_id,
            'platform': self.platform.to_dict() if self.platform else None,
            'tags': [t.to_dict() for t in self.tags],
            'imageUrl': self.image_url,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }
        if include_requirements:
            data['requirements'] = [r.to_dict() for r in self.requirements]
        return data

    def __repr__(self):
        return f"<Game {self.title} ({self.release_year})>"
