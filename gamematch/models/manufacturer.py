from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from gamematch.extension.extensions import db


class Manufacturer(db.Model):
    __tablename__ = 'manufacturers'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), unique=True, nullable=False)

    components = relationship('Component', back_populates='manufacturer')

    def to_dict(self):
        return {'id': self.id, 'name': self.name}

    def __repr__(self):
        return f"<Manufacturer {self.name}>"
