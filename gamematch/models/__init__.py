# gamematch/models/__init__.py

# Import models in the correct order to avoid circular dependencies
from .manufacturer import Manufacturer
from .component import Component, ComponentKind
from .genre import Genre
from .platform import Platform
from .game import Game, game_tags
from .tag import Tag
from .requirement import RequirementSet
from .user import User
from .hardwareProfile import HardwareProfile


# Make them available when importing from this module
__all__ = [
    'Manufacturer', 'Component', 'ComponentKind', 'Genre', 'Platform',
    'Game', 'game_tags', 'Tag', 'RequirementSet', 'User', 'HardwareProfile'
]
