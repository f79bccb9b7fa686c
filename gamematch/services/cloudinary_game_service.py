# gamematch/services/cloudinary_game_service.py
"""
Cloudinary storage for game cover images.
Covers go to the 'GAMEMATCH_COVERS' folder, one public id per upload.
"""

import cloudinary
import cloudinary.uploader
from flask import current_app
from datetime import datetime
from werkzeug.utils import secure_filename

COVER_FOLDER = "GAMEMATCH_COVERS"


def _failure(error):
    return {'success': False, 'error': error, 'url': None, 'public_id': None}


class CloudinaryGameImageService:

    @staticmethod
    def is_configured():
        return all([
            current_app.config.get('CLOUDINARY_CLOUD_NAME'),
            current_app.config.get('CLOUDINARY_API_KEY'),
            current_app.config.get('CLOUDINARY_API_SECRET')
        ])

    @staticmethod
    def configure():
        if not CloudinaryGameImageService.is_configured():
            current_app.logger.warning("Cloudinary credentials not configured")
            return False

        cloudinary.config(
            cloud_name=current_app.config.get('CLOUDINARY_CLOUD_NAME'),
            api_key=current_app.config.get('CLOUDINARY_API_KEY'),
            api_secret=current_app.config.get('CLOUDINARY_API_SECRET'),
            secure=True
        )
        return True

    @staticmethod
    def public_id_for(game_id, title):
        slug = secure_filename((title or "game").replace(' ', '_').lower()) or "game"
        return f"{slug}_{game_id}_{int(datetime.utcnow().timestamp())}"

    @staticmethod
    def upload_cover(image_file, game_id, title):
        """Upload a cover image; returns a result dict instead of raising."""
        if not image_file or not getattr(image_file, 'filename', ''):
            return _failure('No image file provided')

        if not CloudinaryGameImageService.configure():
            return _failure('Cloudinary not configured')

        public_id = CloudinaryGameImageService.public_id_for(game_id, title)
        current_app.logger.info(f"Uploading cover for game {game_id}: {COVER_FOLDER}/{public_id}")

        try:
            upload_result = cloudinary.uploader.upload(
                image_file,
                folder=COVER_FOLDER,
                public_id=public_id,
                resource_type="image",
                overwrite=False,
                quality="auto:good",
                transformation=[{"width": 600, "height": 800, "crop": "fill", "gravity": "center"}]
            )
        except Exception as e:
            current_app.logger.error(f"Cover upload failed for game {game_id}: {e}")
            return _failure(str(e))

        if 'secure_url' not in upload_result or 'public_id' not in upload_result:
            return _failure('Invalid Cloudinary response')

        return {
            'success': True,
            'url': upload_result['secure_url'],
            'public_id': upload_result['public_id'],
            'error': None
        }

    @staticmethod
    def delete_cover(public_id):
        if not CloudinaryGameImageService.configure():
            return {'success': False, 'error': 'Cloudinary not configured'}

        try:
            result = cloudinary.uploader.destroy(public_id)
        except Exception as e:
            current_app.logger.error(f"Error deleting cover {public_id}: {e}")
            return {'success': False, 'error': str(e)}

        if result.get('result') in ('ok', 'not found'):
            current_app.logger.info(f"Deleted cover {public_id} ({result.get('result')})")
            return {'success': True, 'error': None}

        current_app.logger.warning(f"Failed to delete cover {public_id}: {result}")
        return {'success': False, 'error': 'Delete failed'}
