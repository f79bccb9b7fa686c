from sqlalchemy import Column, Integer, Float, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from gamematch.extension.extensions import db


class RequirementSet(db.Model):
    __tablename__ = 'requirements'

    id = Column(Integer, primary_key=True)
    game_id = Column(Integer, ForeignKey('games.id', ondelete='CASCADE'), nullable=False, index=True)

    min_cpu_id = Column(Integer, ForeignKey('components.id', ondelete='RESTRICT'), nullable=False)
    min_gpu_id = Column(Integer, ForeignKey('components.id', ondelete='RESTRICT'), nullable=False)
    rec_cpu_id = Column(Integer, ForeignKey('components.id', ondelete='RESTRICT'), nullable=False)
    rec_gpu_id = Column(Integer, ForeignKey('components.id', ondelete='RESTRICT'), nullable=False)

    min_ram = Column(Float, nullable=False)    # GB
    min_vram = Column(Float, nullable=False)   # MB
    rec_ram = Column(Float, nullable=False)    # GB
    rec_vram = Column(Float, nullable=False)   # MB

    game = relationship('Game', back_populates='requirements')
    min_cpu = relationship('Component', foreign_keys=[min_cpu_id])
    min_gpu = relationship('Component', foreign_keys=[min_gpu_id])
    rec_cpu = relationship('Component', foreign_keys=[rec_cpu_id])
    rec_gpu = relationship('Component', foreign_keys=[rec_gpu_id])

    __table_args__ = (
        CheckConstraint('min_ram >= 0 AND min_vram >= 0 AND rec_ram >= 0 AND rec_vram >= 0',
                        name='ck_requirement_memory_non_negative'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'gameId': self.game_id,
            'minCpu': self.min_cpu.to_dict(with_manufacturer=False) if self.min_cpu else None,
            'minGpu': self.min_gpu.to_dict(with_manufacturer=False) if self.min_gpu else None,
            'recCpu': self.rec_cpu.to_dict(with_manufacturer=False) if self.rec_cpu else None,
            'recGpu': self.rec_gpu.to_dict(with_manufacturer=False) if self.rec_gpu else None,
            'minRam': self.min_ram,
            'minVram': self.min_vram,
            'recRam': self.rec_ram,
            'recVram': self.rec_vram,
        }

    def __repr__(self):
        return f"<RequirementSet game={self.game_id} minRam={self.min_ram} recRam={self.rec_ram}>"
