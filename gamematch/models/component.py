# models/component.py
from sqlalchemy import Column, Integer, String, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from gamematch.extension.extensions import db
import enum


class ComponentKind(str, enum.Enum):
    CPU = "CPU"
    GPU = "GPU"


class Component(db.Model):
    __tablename__ = 'components'

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    kind = Column(Enum(ComponentKind), nullable=False, index=True)
    manufacturer_id = Column(Integer, ForeignKey('manufacturers.id', ondelete='RESTRICT'), nullable=False)
    benchmark_score = Column(Integer, nullable=False)

    manufacturer = relationship('Manufacturer', back_populates='components')

    __table_args__ = (
        CheckConstraint('benchmark_score > 0', name='ck_component_benchmark_positive'),
    )

    def to_dict(self, with_manufacturer=True):
        """Serialize Component model to dictionary"""
        data = {
            'id': self.id,
            'name': self.name,
            'kind': self.kind.value if self.kind else None,
            'manufacturerId': self.manufacturer_id,
            'benchmarkScore': self.benchmark_score,
        }
        if with_manufacturer:
            data['manufacturer'] = self.manufacturer.to_dict() if self.manufacturer else None
        return data

    def __repr__(self):
        return f"<Component {self.kind.value if self.kind else '?'} {self.name} ({self.benchmark_score})>"
