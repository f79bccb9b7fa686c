from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from gamematch.extension.extensions import db
from datetime import datetime


class HardwareProfile(db.Model):
    __tablename__ = 'hardware_profiles'

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), unique=True, nullable=False)
    cpu_id = Column(Integer, ForeignKey('components.id', ondelete='RESTRICT'), nullable=False)
    gpu_id = Column(Integer, ForeignKey('components.id', ondelete='RESTRICT'), nullable=False)
    ram = Column(Float, nullable=False)    # GB
    vram = Column(Float, nullable=False)   # MB
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship('User', back_populates='hardware_profile')
    cpu = relationship('Component', foreign_keys=[cpu_id])
    gpu = relationship('Component', foreign_keys=[gpu_id])

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'cpuId': self.cpu_id,
            'gpuId': self.gpu_id,
            'cpu': self.cpu.to_dict() if self.cpu else None,
            'gpu': self.gpu.to_dict() if self.gpu else None,
            'ram': self.ram,
            'vram': self.vram,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f"<HardwareProfile user={self.user_id} cpu={self.cpu_id} gpu={self.gpu_id}>"
