# gamematch/services/game_service.py
from flask import current_app
from sqlalchemy.orm import joinedload, selectinload

from gamematch.extension.extensions import db
from gamematch.models.component import ComponentKind
from gamematch.models.game import Game
from gamematch.models.genre import Genre
from gamematch.models.platform import Platform
from gamematch.models.requirement import RequirementSet
from gamematch.models.tag import Tag
from gamematch.services.catalog_service import CatalogService, parse_amount, parse_int, commit_or_conflict
from gamematch.services.cloudinary_game_service import CloudinaryGameImageService
from gamematch.services.exceptions import CatalogError

# payload field -> (column, expected component kind)
_COMPONENT_FIELDS = {
    'minCpuId': ('min_cpu_id', ComponentKind.CPU),
    'minGpuId': ('min_gpu_id', ComponentKind.GPU),
    'recCpuId': ('rec_cpu_id', ComponentKind.CPU),
    'recGpuId': ('rec_gpu_id', ComponentKind.GPU),
}
_AMOUNT_FIELDS = {
    'minRam': 'min_ram',
    'minVram': 'min_vram',
    'recRam': 'rec_ram',
    'recVram': 'rec_vram',
}


def _with_details(query):
    return query.options(
        joinedload(Game.genre),
        joinedload(Game.platform),
        selectinload(Game.tags),
        selectinload(Game.requirements).options(
            joinedload(RequirementSet.min_cpu),
            joinedload(RequirementSet.min_gpu),
            joinedload(RequirementSet.rec_cpu),
            joinedload(RequirementSet.rec_gpu),
        ),
    )


class GameService:
    @staticmethod
    def get_all_games():
        """Get all games with requirement sets, ordered by title"""
        return _with_details(Game.query).order_by(Game.title.asc()).all()

    @staticmethod
    def get_game(game_id: int):
        game = _with_details(Game.query).filter(Game.id == game_id).first()
        if not game:
            raise CatalogError("Game not found", 404)
        return game

    @staticmethod
    def search_games(search_term: str, limit: int = 100):
        """
        Case-insensitive partial title match.
        Titles starting with the term come first. Empty term returns nothing.
        """
        if not search_term or search_term.strip() == "":
            return []

        term = search_term.strip()
        return Game.query.filter(
            Game.title.ilike(f"%{term}%")
        ).order_by(
            Game.title.ilike(f"{term}%").desc(),
            Game.title.asc()
        ).limit(limit).all()

    # ── Requirement sets ────────────────────────────────────────────────────

    @staticmethod
    def build_requirement(data) -> RequirementSet:
        """Validate one requirement payload; every component must exist with the right kind."""
        if not isinstance(data, dict):
            raise CatalogError("Each requirement set must be an object", 400)

        fields = {}
        for key, (column, kind) in _COMPONENT_FIELDS.items():
            component_id = parse_int(data, key)
            CatalogService.require_component(component_id, kind, key)
            fields[column] = component_id
        for key, column in _AMOUNT_FIELDS.items():
            fields[column] = parse_amount(data, key)

        if fields['min_ram'] > fields['rec_ram'] or fields['min_vram'] > fields['rec_vram']:
            current_app.logger.warning(f"Requirement set has minimum above recommended memory: {data}")

        return RequirementSet(**fields)

    @staticmethod
    def _requirement_payloads(data):
        """'requirements' may be a single object or a list of them."""
        requirements = data.get('requirements')
        if requirements is None:
            return None
        if isinstance(requirements, dict):
            requirements = [requirements]
        if not isinstance(requirements, list) or not requirements:
            raise CatalogError("requirements must be an object or a non-empty list", 400)
        return requirements

    # ── Games ───────────────────────────────────────────────────────────────

    @staticmethod
    def _apply_fields(game, data, creating):
        if creating or 'title' in data:
            title = (data.get('title') or '').strip()
            if not title:
                raise CatalogError("title is required", 400)
            game.title = title
        if creating or 'genreId' in data:
            game.genre_id = CatalogService.get_named(Genre, parse_int(data, 'genreId')).id
        if creating or 'platformId' in data:
            game.platform_id = CatalogService.get_named(Platform, parse_int(data, 'platformId')).id
        if 'releaseYear' in data:
            game.release_year = parse_int(data, 'releaseYear', required=False)
        if 'imageUrl' in data:
            game.image_url = data.get('imageUrl') or None
        if 'tagIds' in data:
            tag_ids = data.get('tagIds') or []
            if not isinstance(tag_ids, list):
                raise CatalogError("tagIds must be a list", 400)
            tag_ids = [parse_int({'tagId': t}, 'tagId') for t in tag_ids]
            tags = Tag.query.filter(Tag.id.in_(tag_ids)).all() if tag_ids else []
            if len(tags) != len(set(tag_ids)):
                raise CatalogError("Unknown tag id in tagIds", 400)
            game.tags = tags

    @staticmethod
    def create_game(data):
        requirements = GameService._requirement_payloads(data)
        if not requirements:
            raise CatalogError("requirements are required", 400)

        game = Game()
        GameService._apply_fields(game, data, creating=True)
        game.requirements = [GameService.build_requirement(r) for r in requirements]

        db.session.add(game)
        commit_or_conflict()
        current_app.logger.info(f"Game created: {game.id} '{game.title}' with {len(game.requirements)} requirement set(s)")
        return game

    @staticmethod
    def update_game(game_id: int, data):
        """Partial update; a 'requirements' field replaces all requirement sets."""
        game = GameService.get_game(game_id)
        GameService._apply_fields(game, data, creating=False)

        requirements = GameService._requirement_payloads(data)
        if requirements is not None:
            game.requirements = [GameService.build_requirement(r) for r in requirements]

        commit_or_conflict()
        return game

    @staticmethod
    def delete_game(game_id: int):
        game = GameService.get_game(game_id)
        public_id = game.cloudinary_public_id
        db.session.delete(game)
        commit_or_conflict()

        if public_id:
            CloudinaryGameImageService.delete_cover(public_id)
        current_app.logger.info(f"Game deleted: {game_id}")

    # ── Cover images ────────────────────────────────────────────────────────

    @staticmethod
    def update_game_image(game_id: int, image_file):
        """Replace the game cover image in Cloudinary"""
        game = GameService.get_game(game_id)

        upload_result = CloudinaryGameImageService.upload_cover(image_file, game.id, game.title)
        if not upload_result['success']:
            return upload_result

        if game.cloudinary_public_id:
            CloudinaryGameImageService.delete_cover(game.cloudinary_public_id)

        game.image_url = upload_result['url']
        game.cloudinary_public_id = upload_result['public_id']
        db.session.commit()
        return {
            'success': True,
            'image_url': game.image_url,
            'public_id': game.cloudinary_public_id
        }

    @staticmethod
    def delete_game_image(game_id: int):
        game = GameService.get_game(game_id)

        if not game.cloudinary_public_id:
            return {'success': False, 'error': 'No Cloudinary image to delete'}

        result = CloudinaryGameImageService.delete_cover(game.cloudinary_public_id)
        if result['success']:
            game.cloudinary_public_id = None
            game.image_url = None
            db.session.commit()
        return result
